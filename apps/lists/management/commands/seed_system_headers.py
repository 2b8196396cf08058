from django.core.management.base import BaseCommand

from apps.lists.catalog import seed_system_headers


class Command(BaseCommand):
    help = 'Insert the default system header catalog if it is empty'

    def handle(self, *args, **options):
        created = seed_system_headers()

        if not created:
            self.stdout.write(
                self.style.WARNING('System headers already exist, nothing to seed')
            )
            return

        self.stdout.write(
            self.style.SUCCESS(f'Seeded {created} system headers')
        )

from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

User = get_user_model()


class Command(BaseCommand):
    help = 'Create a user that can log in to the API'

    def add_arguments(self, parser):
        parser.add_argument('--email', type=str, required=True)
        parser.add_argument('--password', type=str, required=True)
        parser.add_argument('--username', type=str, default=None)
        parser.add_argument('--staff', action='store_true')

    def handle(self, *args, **options):
        email = options['email'].lower()
        password = options['password']
        username = options['username'] or email

        if User.objects.filter(email=email).exists():
            self.stdout.write(
                self.style.ERROR(f'User with email {email} already exists')
            )
            return

        User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=options['staff'],
        )

        self.stdout.write(
            self.style.SUCCESS(f'Successfully created user {email}')
        )

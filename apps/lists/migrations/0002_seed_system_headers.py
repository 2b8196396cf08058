from django.db import migrations


def seed(apps, schema_editor):
    from apps.lists.catalog import seed_system_headers

    seed_system_headers(apps.get_model('lists', 'SystemHeader'))


class Migration(migrations.Migration):

    dependencies = [
        ('lists', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed, migrations.RunPython.noop),
    ]

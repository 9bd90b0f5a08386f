import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('kanisa_main_app', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='account',
            name='preferred_language',
            field=models.CharField(choices=[('EN', 'English'), ('SW', 'Swahili')], default='EN', max_length=2),
        ),
        migrations.CreateModel(
            name='UserSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('dark_mode', models.BooleanField(default=False)),
                ('push_notifications', models.BooleanField(default=True)),
                ('email_alerts', models.BooleanField(default=True)),
                ('sms_notifications', models.BooleanField(default=True)),
                ('transaction_notifications', models.BooleanField(default=True)),
                ('bill_payment_reminders', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('account', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='settings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'user settings',
            },
        ),
    ]

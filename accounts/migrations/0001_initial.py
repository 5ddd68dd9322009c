import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("licenses", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("external_id", models.CharField(max_length=64, unique=True)),
                ("display_name", models.CharField(max_length=20, unique=True)),
                ("password_hash", models.CharField(max_length=255)),
                (
                    "license",
                    models.OneToOneField(
                        db_column="license_key",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="account",
                        to="licenses.license",
                        to_field="key",
                    ),
                ),
                ("registered_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("last_download_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "accounts",
                "ordering": ["-registered_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="DownloadLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("external_id", models.CharField(db_index=True, max_length=64)),
                ("display_name", models.CharField(max_length=20)),
                ("ip_address", models.CharField(blank=True, max_length=45, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "download_logs",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="CommandLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("external_id", models.CharField(db_index=True, max_length=64)),
                ("username", models.CharField(max_length=100)),
                ("command", models.CharField(max_length=50)),
                ("success", models.BooleanField(default=True)),
                ("error_message", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "command_logs",
                "ordering": ["-created_at"],
            },
        ),
    ]

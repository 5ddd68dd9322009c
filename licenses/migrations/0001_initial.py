import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(max_length=19, unique=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("unused", "Unused"), ("redeemed", "Redeemed"), ("revoked", "Revoked")],
                        default="unused",
                        max_length=10,
                    ),
                ),
                ("owner_id", models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("redeemed_at", models.DateTimeField(blank=True, null=True)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("created_by", models.CharField(blank=True, max_length=64, null=True)),
                ("revoked_by", models.CharField(blank=True, max_length=64, null=True)),
                ("revoke_reason", models.TextField(blank=True, null=True)),
                ("revoked_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["status"], name="licenses_status_idx"),
                    models.Index(fields=["status", "expires_at"], name="licenses_status_expiry_idx"),
                ],
            },
        ),
    ]

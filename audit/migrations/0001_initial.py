import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AdminAction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("admin_id", models.CharField(db_index=True, max_length=64)),
                ("admin_username", models.CharField(max_length=100)),
                ("action_type", models.CharField(db_index=True, max_length=50)),
                ("target_type", models.CharField(blank=True, max_length=50, null=True)),
                ("target_id", models.CharField(blank=True, max_length=100, null=True)),
                ("details", models.JSONField(blank=True, default=dict)),
                ("ip_address", models.CharField(blank=True, max_length=45, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "admin_actions",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="LicenseGenerationBatch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("admin_id", models.CharField(max_length=64)),
                ("admin_username", models.CharField(max_length=100)),
                ("license_type", models.CharField(db_index=True, max_length=20)),
                ("amount", models.PositiveIntegerField()),
                ("duration_hours", models.PositiveIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "license_generation_history",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="ApiAccessLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("endpoint", models.CharField(max_length=255)),
                ("method", models.CharField(max_length=10)),
                ("license_key", models.CharField(blank=True, max_length=64, null=True)),
                ("ip_address", models.CharField(blank=True, max_length=45, null=True)),
                ("user_agent", models.TextField(blank=True, null=True)),
                ("response_status", models.PositiveSmallIntegerField()),
                ("response_time_ms", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "api_access_logs",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="SystemStat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("stat_key", models.CharField(max_length=50, unique=True)),
                ("stat_value", models.JSONField(default=dict)),
                ("last_updated", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "system_stats",
            },
        ),
    ]

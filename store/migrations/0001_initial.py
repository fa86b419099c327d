from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StoreSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("store_name", models.CharField(default="Katsuda", max_length=120)),
                ("phone", models.CharField(blank=True, max_length=40)),
                ("whatsapp", models.CharField(blank=True, max_length=40)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("address", models.JSONField(blank=True, default=dict)),
                ("social_media", models.JSONField(blank=True, default=dict)),
                ("schedules", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "verbose_name": "configuración de la tienda",
                "verbose_name_plural": "configuración de la tienda",
            },
        ),
    ]

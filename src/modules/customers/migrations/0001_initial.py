from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(editable=False)),
                ("updated_at", models.DateTimeField(editable=False)),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("phone", models.CharField(blank=True, default="", max_length=20)),
                ("document_number", models.CharField(max_length=20, unique=True)),
            ],
            options={
                "db_table": "customers",
                "ordering": ["name", "id"],
                "indexes": [
                    models.Index(fields=["name"], name="customers_name_idx"),
                ],
            },
        ),
    ]

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("scheduler", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="reviewlog",
            name="review_count",
            field=models.PositiveIntegerField(default=0),
        ),
    ]

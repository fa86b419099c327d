from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="ordersequence",
            name="prefix",
            field=models.CharField(default="KAT", max_length=16),
        ),
        migrations.AlterField(
            model_name="ordersequence",
            name="day",
            field=models.DateField(),
        ),
        migrations.AddConstraint(
            model_name="ordersequence",
            constraint=models.UniqueConstraint(fields=("prefix", "day"), name="uniq_order_sequence_prefix_day"),
        ),
    ]

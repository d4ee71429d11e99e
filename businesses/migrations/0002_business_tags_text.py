from django.db import migrations, models


def fill_tags_text(apps, schema_editor):
    Business = apps.get_model("businesses", "Business")
    for business in Business.objects.only("id", "tags"):
        text = "\n".join(str(tag).strip().lower() for tag in (business.tags or []) if str(tag).strip())
        Business.objects.filter(pk=business.pk).update(tags_text=text)


class Migration(migrations.Migration):

    dependencies = [
        ("businesses", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="business",
            name="tags_text",
            field=models.TextField(blank=True, default="", editable=False),
        ),
        migrations.RunPython(fill_tags_text, migrations.RunPython.noop),
    ]

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('files', '0001_initial'),
    ]

    operations = [
        migrations.AddConstraint(
            model_name='fileentry',
            constraint=models.CheckConstraint(condition=models.Q(('size__gte', 0)), name='files_size_non_negative'),
        ),
        migrations.AddConstraint(
            model_name='fileentry',
            constraint=models.CheckConstraint(condition=models.Q(('is_folder', True), models.Q(('file_url', ''), _negated=True), _connector='OR'), name='files_file_url_required'),
        ),
    ]

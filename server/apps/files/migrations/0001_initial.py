import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='FileEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(help_text='Display name chosen by the owner', max_length=255)),
                ('path', models.CharField(help_text='Storage path: {namespace}/{owner_id}/...', max_length=1024)),
                ('size', models.BigIntegerField(default=0, help_text='File size in bytes, 0 for folders')),
                ('type', models.CharField(help_text='Media type of the payload or "folder"', max_length=255)),
                ('file_url', models.CharField(blank=True, default='', max_length=2048)),
                ('thumbnail_url', models.CharField(blank=True, max_length=2048, null=True)),
                ('is_folder', models.BooleanField(default=False)),
                ('is_starred', models.BooleanField(default=False)),
                ('is_trashed', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='file_entries', to=settings.AUTH_USER_MODEL)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='children', to='files.fileentry')),
            ],
            options={
                'verbose_name': 'File entry',
                'verbose_name_plural': 'File entries',
                'ordering': ['-is_folder', 'name'],
                'indexes': [models.Index(fields=['owner', 'parent'], name='files_owner_parent_idx')],
                'constraints': [models.UniqueConstraint(fields=('owner', 'path'), name='files_owner_path_unique')],
            },
        ),
    ]

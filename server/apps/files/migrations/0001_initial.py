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
            name='File',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('type', models.CharField(choices=[('folder', 'Folder'), ('file', 'File'), ('image', 'Image')], max_length=16)),
                ('is_public', models.BooleanField(default=False)),
                ('local_path', models.CharField(blank=True, default='', help_text='Blob name in the local blob store (files and images only)', max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='children', to='files.file')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'ordering': ['created_at', 'id'],
                'indexes': [models.Index(fields=['user', 'parent', 'created_at'], name='files_user_parent_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(models.Q(('local_path', ''), ('type', 'folder')), models.Q(('type__in', ['file', 'image']), models.Q(('local_path', ''), _negated=True)), _connector='OR'), name='files_local_path_matches_type')],
            },
        ),
    ]

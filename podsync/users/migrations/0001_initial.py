from django.db import migrations, models
import django.db.models.deletion
from django.conf import settings

import podsync.users.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Device',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('deviceid', models.CharField(max_length=64, validators=[podsync.users.models.UIDValidator()])),
                ('data', models.JSONField(default=dict)),
                ('user', models.ForeignKey(to=settings.AUTH_USER_MODEL, on_delete=django.db.models.deletion.CASCADE)),
            ],
        ),
        migrations.AlterUniqueTogether(
            name='device',
            unique_together=set([('user', 'deviceid')]),
        ),
    ]

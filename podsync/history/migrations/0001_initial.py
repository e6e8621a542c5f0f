from django.db import migrations, models
import django.db.models.deletion
from django.conf import settings


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('subscriptions', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='EpisodeAction',
            fields=[
                ('id', models.AutoField(verbose_name='ID', serialize=False, auto_created=True, primary_key=True)),
                ('changed', models.BigIntegerField(db_index=True)),
                ('url', models.CharField(max_length=2048)),
                ('action', models.CharField(max_length=64)),
                ('data', models.JSONField(default=dict)),
                ('user', models.ForeignKey(to=settings.AUTH_USER_MODEL, on_delete=django.db.models.deletion.CASCADE)),
                ('subscription', models.ForeignKey(to='subscriptions.Subscription', on_delete=django.db.models.deletion.CASCADE)),
            ],
            options={
                'ordering': ['changed', 'id'],
                'verbose_name_plural': 'Episode Actions',
            },
        ),
        migrations.AddIndex(
            model_name='episodeaction',
            index=models.Index(fields=['user', 'changed'], name='episodeaction_user_changed'),
        ),
    ]

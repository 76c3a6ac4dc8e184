from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('kind', models.CharField(choices=[('dinner', 'Dinner'), ('cultural', 'Cultural'), ('custom', 'Custom')], max_length=20)),
                ('custom_type', models.CharField(blank=True, max_length=50)),
                ('description', models.TextField()),
                ('venue', models.CharField(max_length=255)),
                ('start_time', models.DateTimeField()),
                ('end_time', models.DateTimeField()),
                ('rsvp_required', models.BooleanField(default=False)),
                ('ticket_info', models.CharField(blank=True, max_length=500)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={'ordering': ['start_time', 'id']},
        ),
    ]

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Patient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('age', models.PositiveIntegerField(blank=True, null=True)),
                ('gender', models.CharField(blank=True, max_length=16)),
                ('phone', models.CharField(blank=True, max_length=32)),
                ('emergency_contact', models.CharField(blank=True, max_length=255)),
                ('blood_group', models.CharField(blank=True, max_length=8)),
                ('allergies', models.JSONField(blank=True, default=list)),
                ('current_department', models.CharField(blank=True, db_index=True, max_length=64)),
                ('status', models.CharField(choices=[('waiting', 'Waiting'), ('admitted', 'Admitted'), ('discharged', 'Discharged'), ('emergency', 'Emergency')], db_index=True, default='waiting', max_length=16)),
                ('admission_date', models.DateTimeField(blank=True, default=django.utils.timezone.now, null=True)),
            ],
        ),
        migrations.CreateModel(
            name='Appointment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('patient_id', models.PositiveIntegerField(db_index=True)),
                ('doctor_id', models.CharField(max_length=64)),
                ('department', models.CharField(blank=True, max_length=64)),
                ('date', models.DateField(db_index=True)),
                ('time_slot', models.CharField(max_length=16)),
                ('status', models.CharField(choices=[('scheduled', 'Scheduled'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='scheduled', max_length=16)),
                ('notes', models.TextField(blank=True)),
            ],
            options={
                'indexes': [models.Index(fields=['date', 'time_slot'], name='appointment_date_slot_idx')],
            },
        ),
        migrations.CreateModel(
            name='Department',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=64, unique=True)),
                ('current_queue', models.PositiveIntegerField(default=0)),
                ('average_wait_time', models.PositiveIntegerField(default=0, help_text='Average wait in minutes')),
                ('active_staff', models.PositiveIntegerField(default=0)),
            ],
        ),
        migrations.CreateModel(
            name='Bed',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('ward_name', models.CharField(db_index=True, max_length=64)),
                ('bed_number', models.CharField(max_length=16)),
                ('is_occupied', models.BooleanField(default=False)),
                ('patient_id', models.PositiveIntegerField(blank=True, null=True)),
                ('admitted_date', models.DateTimeField(blank=True, null=True)),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('ward_name', 'bed_number'), name='unique_bed_per_ward')],
            },
        ),
    ]

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
            name='Property',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('property_type', models.CharField(choices=[('apartment', 'Apartment'), ('house', 'House'), ('villa', 'Villa'), ('plot', 'Plot'), ('commercial', 'Commercial'), ('office', 'Office')], default='apartment', max_length=20)),
                ('listing_type', models.CharField(choices=[('sale', 'Sale'), ('rent', 'Rent')], default='sale', max_length=10)),
                ('status', models.CharField(choices=[('available', 'Available'), ('sold', 'Sold'), ('rented', 'Rented')], default='available', max_length=10)),
                ('price', models.DecimalField(decimal_places=2, max_digits=15)),
                ('available_from', models.DateField(blank=True, null=True)),
                ('address', models.TextField(blank=True, default='')),
                ('city', models.CharField(blank=True, default='', max_length=100)),
                ('state', models.CharField(blank=True, default='', max_length=100)),
                ('pincode', models.CharField(blank=True, default='', max_length=20)),
                ('latitude', models.DecimalField(blank=True, decimal_places=8, max_digits=10, null=True)),
                ('longitude', models.DecimalField(blank=True, decimal_places=8, max_digits=11, null=True)),
                ('area_sqft', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('bedrooms', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('bathrooms', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('brochure', models.FileField(blank=True, default='', upload_to='properties/brochures/%Y/%m/')),
                ('is_featured', models.BooleanField(default=False)),
                ('views', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='properties', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'properties',
                'db_table': 'properties',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['city'], name='property_city_idx'),
                    models.Index(fields=['property_type'], name='property_type_idx'),
                    models.Index(fields=['status'], name='property_status_idx'),
                    models.Index(fields=['price'], name='property_price_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PropertyImage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('image', models.ImageField(upload_to='properties/images/%Y/%m/%d/')),
                ('caption', models.CharField(blank=True, max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='images', to='properties.property')),
            ],
            options={
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='PropertyView',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('session_id', models.CharField(blank=True, max_length=255, null=True)),
                ('ip_address', models.CharField(blank=True, max_length=45, null=True)),
                ('viewed_at', models.DateTimeField()),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='view_records', to='properties.property')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='property_views', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'property_views',
                'ordering': ['-viewed_at'],
                'indexes': [
                    models.Index(fields=['property'], name='property_view_property_idx'),
                    models.Index(fields=['session_id'], name='property_view_session_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('property', 'user'), name='property_view_unique_user'),
                    models.UniqueConstraint(fields=('property', 'session_id'), name='property_view_unique_session'),
                    models.CheckConstraint(condition=models.Q(('user__isnull', True), ('session_id__isnull', True), _connector='OR'), name='property_view_single_identity'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StorageHistoryRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('record_month', models.CharField(max_length=7, unique=True)),
                ('total_files', models.PositiveIntegerField(default=0)),
                ('total_size_mb', models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ('images_count', models.PositiveIntegerField(default=0)),
                ('images_size_mb', models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ('brochures_count', models.PositiveIntegerField(default=0)),
                ('brochures_size_mb', models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'storage_history',
                'ordering': ['record_month'],
            },
        ),
    ]

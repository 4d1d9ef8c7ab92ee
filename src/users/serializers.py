from django.contrib.auth.password_validation import validate_password
from django.core import exceptions as django_exc
from rest_framework import serializers

from .models import CustomUser

PROFILE_FIELDS = ('first_name', 'last_name', 'phone_number', 'location')


class RegistrationSerializer(serializers.ModelSerializer):
    """
    Self-service sign-up. Always creates a regular account: staff (admin)
    accounts are only made through the admin site or createsuperuser.
    """
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    role = serializers.CharField(read_only=True)

    class Meta:
        model = CustomUser
        fields = ('id', 'email', 'password', 'role') + PROFILE_FIELDS
        read_only_fields = ('id',)

    def validate(self, attrs):
        candidate = CustomUser(**{k: v for k, v in attrs.items() if k != 'password'})
        try:
            # similarity checks need the other attributes
            validate_password(attrs['password'], user=candidate)
        except django_exc.ValidationError as e:
            raise serializers.ValidationError({'password': list(e.messages)})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        return CustomUser.objects.create_user(password=password, **validated_data)


class CustomUserSerializer(serializers.ModelSerializer):
    """Own profile; email, role and flags cannot be changed through the API."""
    role = serializers.CharField(read_only=True)

    class Meta:
        model = CustomUser
        fields = ('id', 'email', 'role', 'is_staff', 'date_joined') + PROFILE_FIELDS
        read_only_fields = ('id', 'email', 'is_staff', 'date_joined')

from rest_framework import serializers
from django.contrib.auth.models import User
from django.db.models import Q


def email_in_use(email, exclude=None):
    """True if any other account has this email, either as its email or its login username."""
    users = User.objects.filter(Q(email__iexact=email) | Q(username__iexact=email))
    if exclude is not None:
        users = users.exclude(pk=exclude.pk)
    return users.exists()


def display_name(user):
    profile = getattr(user, 'profile', None)
    if profile is not None and profile.name:
        return profile.name
    return user.get_full_name() or user.username


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField()
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)


class UserSerializer(serializers.ModelSerializer):
    """Compact user shape embedded in boards and tasks."""
    name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ('id', 'name', 'email')

    def get_name(self, obj):
        return display_name(obj)


class ProfileSerializer(UserSerializer):
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta(UserSerializer.Meta):
        fields = ('id', 'name', 'email', 'createdAt')

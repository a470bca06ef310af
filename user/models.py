from django.db import models
from django.contrib.auth.models import User

# Create your models here.

class UserProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    name = models.CharField(max_length=255, blank=True, default='')
    image = models.URLField(max_length=1024, null=True, blank=True)

    def __str__(self):
        return self.name or self.user.email

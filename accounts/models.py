# accounts/models.py

from django.db import models
from django.contrib.auth.models import AbstractUser
from .managers import CustomUserManager
from .images import optimize_image


class User(AbstractUser):
    username = None
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=150, blank=False)
    last_name = models.CharField(max_length=150, blank=False)
    avatar = models.ImageField(upload_to='avatars/', blank=True, null=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    objects = CustomUserManager()

    def __str__(self):
        return self.email

    def to_dict(self):
        return {
            'id': self.pk,
            'email': self.email,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'avatar': self.avatar.url if self.avatar else None,
        }

    def save(self, *args, **kwargs):
        # Only freshly uploaded files need resizing
        if self.avatar and not self.avatar._committed:
            optimized = optimize_image(self.avatar)
            if optimized is not None:
                self.avatar = optimized
        super().save(*args, **kwargs)

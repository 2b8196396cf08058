from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    email = models.EmailField(unique=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def save(self, *args, **kwargs):
        # Emails are looked up lowercased at login
        if self.email:
            self.email = self.email.lower()
        super().save(*args, **kwargs)

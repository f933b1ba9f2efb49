from django.db import models
from django.contrib.auth.models import AbstractUser


class CustomUser(AbstractUser):
    """
    Hospital staff account.
    Sign-in is delegated to the external identity provider; external_id is its user id.
    """
    external_id = models.CharField(max_length=64, unique=True, null=True, blank=True)
    display_name = models.CharField(max_length=150, blank=True)
    picture_url = models.URLField(max_length=500, blank=True)

    def __str__(self):
        return self.username

    def as_json(self):
        return {
            "id": self.id,
            "external_id": self.external_id,
            "username": self.username,
            "email": self.email,
            "display_name": self.display_name or self.get_full_name() or self.username,
            "picture_url": self.picture_url,
        }

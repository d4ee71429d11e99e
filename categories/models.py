"""Categories app models.

Defines the flat Category list. The number of businesses per category is not
stored here; it is aggregated from the businesses table whenever it is read.
"""

from django.db import models
from django.utils.text import slugify


class Category(models.Model):
    """A business category such as "Restaurants & Dining"."""

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    icon = models.CharField(max_length=50, default="briefcase")
    description = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)
    order = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "categories"
        ordering = ("order", "name")
        verbose_name_plural = "categories"

    def save(self, *args, **kwargs):
        if not self.slug and self.name:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name

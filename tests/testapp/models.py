"""
Entities referenced from audit log snapshots in the test suite.
"""

from django.db import models

from common.models import SoftDeleteModel


class Contact(SoftDeleteModel):
    name = models.CharField(max_length=100)
    email = models.EmailField(blank=True, default='')

    def __str__(self):
        return f"Contact #{self.pk}"


class Material(SoftDeleteModel):
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=20, blank=True, default='')

    def __str__(self):
        return self.name


class Widget(SoftDeleteModel):
    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('live', 'Live'),
    ]

    name = models.CharField(max_length=100)
    description = models.CharField(max_length=200, blank=True, default='')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='draft')

    def get_label(self):
        return f"{self.name} ({self.pk})"

    def get_custom_label(self):
        return f"Custom: {self.name}"

    def label_method(self):
        return f"Method: {self.name}"

    def exploding_label(self):
        raise RuntimeError("label backend down")

    @property
    def summary(self):
        return f"{self.name}: {self.description}"

    def __str__(self):
        return f"Widget {self.name}"


class Category(models.Model):
    """Plain model without soft deletes"""
    title = models.CharField(max_length=100)

    def __str__(self):
        return self.title

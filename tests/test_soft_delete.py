import pytest

from tests.testapp.models import Contact

pytestmark = pytest.mark.django_db


def test_delete_tombstones_the_row():
    contact = Contact.objects.create(name='Acme')

    contact.delete()

    assert contact.is_deleted
    assert not Contact.objects.filter(pk=contact.pk).exists()
    assert Contact.all_objects.dead().filter(pk=contact.pk).exists()


def test_restore():
    contact = Contact.objects.create(name='Acme')
    contact.delete()

    contact.restore()

    assert not contact.is_deleted
    assert Contact.objects.filter(pk=contact.pk).exists()


def test_bulk_delete_is_soft():
    Contact.objects.create(name='Acme')
    Contact.objects.create(name='Globex')

    Contact.objects.all().delete()

    assert Contact.objects.count() == 0
    assert Contact.all_objects.count() == 2


def test_hard_delete_removes_the_row():
    contact = Contact.objects.create(name='Acme')

    contact.hard_delete()

    assert not Contact.all_objects.filter(pk=contact.pk).exists()
    Contact.objects.create(name='Globex')
    Contact.all_objects.all().hard_delete()
    assert Contact.all_objects.count() == 0

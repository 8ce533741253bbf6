import pytest

from audit.registry import EntityLookup, EntityRegistry, ModelEntityLookup, registry as default_registry
from core.exceptions import InvalidEntityTypeError
from tests.fakes import PLANETS, DictLookup
from tests.testapp.models import Contact, Material, Widget


@pytest.fixture
def fresh_registry():
    return EntityRegistry()


def test_resolves_app_label_and_model_name(fresh_registry):
    tag, lookup = fresh_registry.resolve('testapp.Contact', 'contact_id')

    assert tag == 'testapp.Contact'
    assert isinstance(lookup, ModelEntityLookup)
    assert lookup.model is Contact


def test_resolves_model_class(fresh_registry):
    tag, lookup = fresh_registry.resolve(Contact, 'contact_id')

    assert tag == 'testapp.Contact'
    assert lookup.model is Contact
    assert fresh_registry.is_registered(Contact)


def test_resolves_dotted_import_path(fresh_registry):
    tag, lookup = fresh_registry.resolve('tests.testapp.models.Widget', 'widget_id')

    assert tag == 'testapp.Widget'
    assert lookup.model is Widget
    assert fresh_registry.is_registered('tests.testapp.models.Widget')


def test_model_is_resolved_to_one_lookup(fresh_registry):
    _, by_label = fresh_registry.resolve('testapp.Contact', 'contact_id')
    _, by_class = fresh_registry.resolve(Contact, 'contact_id')
    _, by_path = fresh_registry.resolve('tests.testapp.models.Contact', 'contact_id')

    assert by_label is by_class is by_path


def test_resolves_importable_lookup_instance(fresh_registry):
    tag, lookup = fresh_registry.resolve('tests.fakes.PLANETS', 'planet_id')

    assert tag == 'tests.fakes.PLANETS'
    assert lookup is PLANETS


def test_registered_tag_wins(fresh_registry):
    lookup = DictLookup()
    fresh_registry.register('supplier', lookup)

    assert fresh_registry.resolve('supplier', 'supplier_id') == ('supplier', lookup)


@pytest.mark.parametrize('name', ['testapp.Nope', 'nope', 'no.such.module.Thing', '', '.Contact', '..', 'testapp..Contact'])
def test_unknown_entity_type(fresh_registry, name):
    with pytest.raises(InvalidEntityTypeError) as exc_info:
        fresh_registry.resolve(name, 'thing_id')

    assert str(exc_info.value) == f"Entity type '{name}' does not exist for field: thing_id"
    assert exc_info.value.details == {'field': 'thing_id', 'entity_type': name}


def test_abstract_model_is_not_an_entity(fresh_registry):
    with pytest.raises(InvalidEntityTypeError) as exc_info:
        fresh_registry.resolve('common.models.SoftDeleteModel', 'thing_id')

    assert str(exc_info.value) == (
        "Entity type 'common.models.SoftDeleteModel' must be a Django model "
        "or a registered entity lookup for field: thing_id"
    )


def test_importable_non_entity_is_rejected(fresh_registry):
    with pytest.raises(InvalidEntityTypeError) as exc_info:
        fresh_registry.resolve('tests.fakes.make_registry', 'thing_id')

    assert exc_info.value.entity_type == 'tests.fakes.make_registry'


def test_non_string_reference_is_rejected(fresh_registry):
    with pytest.raises(InvalidEntityTypeError) as exc_info:
        fresh_registry.resolve(42, 'thing_id')

    assert str(exc_info.value) == "Entity type must be a string or model class for field: thing_id"


def test_unhashable_reference_is_rejected(fresh_registry):
    with pytest.raises(InvalidEntityTypeError):
        fresh_registry.resolve(['testapp.Contact'], 'thing_id')


def test_register_requires_lookup_for_non_models(fresh_registry):
    with pytest.raises(TypeError):
        fresh_registry.register('supplier')


def test_register_rejects_non_lookup(fresh_registry):
    with pytest.raises(TypeError):
        fresh_registry.register('supplier', object())


def test_unregister(fresh_registry):
    fresh_registry.register(Contact)
    fresh_registry.unregister(Contact)

    assert not fresh_registry.is_registered('testapp.Contact')


def test_clear(fresh_registry):
    fresh_registry.register(Contact)
    fresh_registry.register('supplier', DictLookup())
    fresh_registry.clear()

    assert not fresh_registry.is_registered(Contact)
    assert not fresh_registry.is_registered('supplier')


def test_base_lookup_must_implement_find():
    with pytest.raises(NotImplementedError):
        EntityLookup().find(1)


def test_configured_entity_types_are_registered_on_startup():
    tag, lookup = default_registry.resolve('material', 'items.*.material_id')

    assert tag == 'material'
    assert lookup.model is Material


# ============================================================================
# MODEL LOOKUPS
# ============================================================================

@pytest.mark.django_db
class TestModelEntityLookup:

    def test_finds_by_primary_key(self):
        contact = Contact.objects.create(name='Acme')

        assert ModelEntityLookup(Contact).find(contact.pk) == contact

    def test_finds_by_string_primary_key(self):
        contact = Contact.objects.create(name='Acme')

        assert ModelEntityLookup(Contact).find(str(contact.pk)) == contact

    def test_finds_soft_deleted_rows(self):
        contact = Contact.objects.create(name='Acme')
        contact.delete()

        assert ModelEntityLookup(Contact).find(contact.pk) == contact

    def test_can_exclude_soft_deleted_rows(self):
        contact = Contact.objects.create(name='Acme')
        contact.delete()

        assert ModelEntityLookup(Contact).find(contact.pk, include_deleted=False) is None

    def test_missing_row(self):
        assert ModelEntityLookup(Contact).find(12345) is None

    def test_identifier_of_the_wrong_type(self):
        assert ModelEntityLookup(Contact).find('abc') is None

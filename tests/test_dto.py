import dataclasses

import pytest

from core.dto import MappingRule, NestedPattern, guess_new_key, is_nested_pattern, split_nested_pattern


@pytest.mark.parametrize('path, expected', [
    ('customer_id', 'customer'),
    ('items.*.material_id', 'material'),
    ('status', 'status'),
    ('identity', 'identity'),
    ('lines.*.sku', 'sku'),
])
def test_guess_new_key(path, expected):
    assert guess_new_key(path) == expected


def test_simple_path_is_not_nested():
    assert not is_nested_pattern('contact_id')
    assert split_nested_pattern('contact_id') is None


def test_nested_path_splits_on_wildcard():
    assert split_nested_pattern('items.*.material_id') == NestedPattern('items', 'material_id')


def test_only_first_wildcard_is_honored():
    pattern = split_nested_pattern('orders.*.lines.*.product_id')

    assert pattern.container_key == 'orders'
    assert pattern.item_field == 'lines.*.product_id'


def test_dotted_path_without_wildcard_is_simple():
    assert not is_nested_pattern('items.0.material_id')


def test_rule_derives_new_key_when_absent():
    rule = MappingRule(foreign_key='items.*.material_id', entity_type='material')

    assert rule.new_key == 'material'
    assert rule.is_nested
    assert rule.nested_pattern == NestedPattern('items', 'material_id')


def test_rule_keeps_explicit_new_key():
    rule = MappingRule(foreign_key='contact_id', entity_type='contact', new_key='customer')

    assert rule.new_key == 'customer'
    assert rule.label_attribute == 'label'


def test_rule_is_immutable():
    rule = MappingRule(foreign_key='contact_id', entity_type='contact')

    with pytest.raises(dataclasses.FrozenInstanceError):
        rule.new_key = 'other'

import pytest

from azizi_pos.exceptions import DuplicateSKUError, ProductValidationError
from azizi_pos.repositories import IProductRepository


def test_create_assigns_id_defaults_and_timestamps(products):
    assert isinstance(products, IProductRepository)

    saved = products.save({'name': 'Headset'})

    assert saved['id']
    assert saved['sku'] == ''
    assert saved['name'] == 'Headset'
    assert saved['price'] == 0
    assert saved['stock'] == 0
    assert saved['createdAt'] == saved['updatedAt'] == '2025-09-14 10:30:05'
    assert products.list_products() == [saved]


def test_create_keeps_given_id_and_coerces_numbers(products):
    saved = products.save({'id': 'p-1', 'sku': 'A1', 'name': 'Cable', 'price': '12500', 'stock': '7'})
    assert saved['id'] == 'p-1'
    assert saved['price'] == 12500
    assert saved['stock'] == 7
    assert products.find_by_id('p-1') == saved


def test_blank_id_gets_generated(products):
    saved = products.save({'id': '', 'sku': 'X'})
    assert saved['id'] != ''


def test_n_saves_give_n_distinct_ids(products):
    for i in range(10):
        products.save({'sku': f'SKU{i:03d}', 'name': f'P{i}', 'price': i * 1000})

    stored = products.list_products()
    assert len(stored) == 10
    assert len({p['id'] for p in stored}) == 10
    assert all(p['createdAt'] <= p['updatedAt'] for p in stored)


def test_duplicate_sku_is_rejected_case_and_space_insensitive(products):
    first = products.save({'sku': 'SKU001', 'name': 'Kartu Perdana'})
    before = products.list_products()

    with pytest.raises(DuplicateSKUError) as exc:
        products.save({'sku': '  sku001 ', 'name': 'Other'})

    assert str(exc.value) == 'SKU sudah digunakan oleh produk lain.'
    assert exc.value.existing_id == first['id']
    assert products.list_products() == before


def test_updating_other_product_to_taken_sku_is_rejected(products):
    products.save({'id': 'a', 'sku': 'AAA'})
    products.save({'id': 'b', 'sku': 'BBB'})

    with pytest.raises(DuplicateSKUError):
        products.save({'id': 'b', 'sku': 'aaa'})
    assert products.find_by_id('b')['sku'] == 'BBB'


def test_product_may_keep_its_own_sku(products):
    products.save({'id': 'a', 'sku': 'AAA', 'name': 'Old'})
    updated = products.save({'id': 'a', 'sku': 'aaa', 'name': 'New'})
    assert updated['name'] == 'New'


def test_blank_skus_are_never_unique_checked(products):
    products.save({'name': 'No code 1'})
    products.save({'sku': '', 'name': 'No code 2'})
    products.save({'sku': '   ', 'name': 'No code 3'})
    assert len(products.list_products()) == 3


def test_update_merges_and_preserves_created_at(products, clock):
    created = products.save({'id': 'p', 'sku': 'S', 'name': 'Headset', 'price': 50000, 'stock': 12, 'color': 'black'})

    clock.set(2025, 9, 15, 8, 0, 0)
    updated = products.save({'id': 'p', 'price': 45000, 'createdAt': '1999-01-01 00:00:00'})

    assert updated['name'] == 'Headset'
    assert updated['color'] == 'black'
    assert updated['price'] == 45000
    assert updated['stock'] == 12
    assert updated['createdAt'] == created['createdAt']
    assert updated['updatedAt'] == '2025-09-15 08:00:00'
    assert products.find_by_id('p') == updated


def test_update_coerces_stock(products):
    products.save({'id': 'p', 'stock': 3})
    assert products.save({'id': 'p', 'stock': '9'})['stock'] == 9
    assert products.save({'id': 'p', 'stock': None})['stock'] == 9


def test_invalid_values_are_rejected_without_write(products):
    products.save({'id': 'p', 'sku': 'S', 'price': 100})
    before = products.list_products()

    with pytest.raises(ProductValidationError):
        products.save({'id': 'p', 'price': 'abc'})
    with pytest.raises(ProductValidationError):
        products.save({'sku': 'NEG', 'price': -1})
    with pytest.raises(ProductValidationError):
        products.save({'sku': 'FRAC', 'stock': 1.5})
    with pytest.raises(ValueError):
        products.save({'sku': 'NAN', 'price': float('nan')})

    assert products.list_products() == before


def test_find_by_sku(products):
    saved = products.save({'sku': 'SKU002', 'name': 'Charger Type-C', 'price': 75000})
    assert products.find_by_sku(' sku002 ') == saved
    assert products.find_by_sku('SKU999') is None
    assert products.find_by_sku('') is None
    assert products.find_by_sku(None) is None


def test_find_by_id_not_found(products):
    assert products.find_by_id('nope') is None


def test_returned_records_are_copies(products):
    saved = products.save({'id': 'p', 'name': 'Headset'})
    saved['name'] = 'mutated'
    found = products.find_by_id('p')
    found['name'] = 'mutated again'
    assert products.find_by_id('p')['name'] == 'Headset'


def test_delete(products):
    products.save({'id': 'a', 'sku': 'A'})
    products.save({'id': 'b', 'sku': 'B'})

    assert products.delete('a') == 1
    assert products.find_by_id('a') is None
    assert [p['id'] for p in products.list_products()] == ['b']
    assert products.delete('a') == 0


def test_delete_removes_every_record_with_that_id(products, collections):
    collections.set_products([{'id': 'x'}, {'id': 'y'}, {'id': 'x'}])
    assert products.delete('x') == 2
    assert collections.get_products() == [{'id': 'y'}]


def test_deleted_sku_can_be_reused(products):
    products.save({'id': 'a', 'sku': 'REUSE'})
    products.delete('a')
    assert products.save({'sku': 'reuse'})['sku'] == 'reuse'


def test_save_when_products_entry_is_corrupted(products, storage):
    storage.set_item('az_pos_products', 'garbage')
    saved = products.save({'sku': 'NEW'})
    assert products.list_products() == [saved]


def test_queries_when_products_entry_is_null(products, storage):
    storage.set_item('az_pos_products', 'null')
    assert products.list_products() == []
    assert products.find_by_id('x') is None
    assert products.find_by_sku('SKU001') is None

    saved = products.save({'sku': 'SKU001'})
    assert products.find_by_sku('sku001') == saved

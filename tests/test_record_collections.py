import logging

import pytest

from azizi_pos.exceptions import StorageQuotaError
from azizi_pos.repositories import COLLECTION_NAMES, KeyValueStore, MemoryStorage, RecordCollections


def test_defaults(collections):
    assert collections.get_products() == []
    assert collections.get_sales() == []
    assert collections.get_stock_moves() == []
    assert collections.get_settings() == {
        'storeName': 'Azizi Cell',
        'storeAddr': '',
        'storeFooter': 'Terima kasih!',
        'invPrefix': 'INV',
        'taxDefault': 0,
    }
    assert collections.get_invoice_counter() == {'year': 2025, 'seq': 0}
    assert collections.get_cash_sessions() == {'open': None, 'history': []}


def test_invoice_counter_default_follows_clock(collections, clock):
    clock.set(2031, 1, 1)
    assert collections.get_invoice_counter() == {'year': 2031, 'seq': 0}


def test_keys_use_namespace(collections):
    assert [collections.key_for(n) for n in COLLECTION_NAMES] == [
        'az_pos_products',
        'az_pos_sales',
        'az_pos_stockMoves',
        'az_pos_settings',
        'az_pos_invoiceCounter',
        'az_pos_cashSessions',
    ]


def test_custom_prefix(store):
    collections = RecordCollections(store, key_prefix='shop2_')
    collections.set_sales([{'total': 1}])
    assert store.get('shop2_sales') == [{'total': 1}]


def test_unknown_collection(collections):
    with pytest.raises(KeyError):
        collections.key_for('customers')


def test_getters_return_copies(collections):
    collections.set_products([{'id': 'a'}])
    products = collections.get_products()
    products.append({'id': 'b'})
    products[0]['id'] = 'changed'

    assert collections.get_products() == [{'id': 'a'}]


def test_setter_overwrites_whole_entry(collections):
    collections.set_settings({'storeName': 'Other'})
    assert collections.get_settings() == {'storeName': 'Other'}


def test_opaque_collections_roundtrip(collections):
    sale = {'invoice': 'INV-202509-0001', 'items': [{'sku': 'SKU001', 'qty': 2}]}
    move = {'type': 'in', 'qty': 5}
    cash = {'open': {'openedAt': '2025-09-14 08:00:00', 'float': 100000}, 'history': []}

    collections.set_sales([sale])
    collections.set_stock_moves([move])
    collections.set_cash_sessions(cash)

    assert collections.get_sales() == [sale]
    assert collections.get_stock_moves() == [move]
    assert collections.get_cash_sessions() == cash


def test_update_uses_collection_default(collections):
    result = collections.update('stockMoves', lambda moves: moves + [{'qty': 1}])
    assert result == [{'qty': 1}]
    assert collections.get_stock_moves() == [{'qty': 1}]


def test_unexpected_type_falls_back_to_default(collections, storage, caplog):
    storage.set_item('az_pos_settings', '[1, 2]')
    storage.set_item('az_pos_sales', '{"not": "a list"}')

    with caplog.at_level(logging.WARNING):
        assert collections.get_settings()['invPrefix'] == 'INV'
        assert collections.get_sales() == []

    assert 'az_pos_settings' in caplog.text
    assert collections.update('sales', lambda sales: sales + [{'id': 's1'}]) == [{'id': 's1'}]


def test_setter_returns_write_failure():
    collections = RecordCollections(KeyValueStore(MemoryStorage(quota_bytes=64)))
    assert collections.set_sales([{'id': 's1'}]) is None
    assert isinstance(collections.set_sales([{'id': str(i)} for i in range(50)]), StorageQuotaError)
    assert collections.get_sales() == [{'id': 's1'}]

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from retailers.database import Base
from retailers.models.customer import Customer
from retailers.models.product import Product
from retailers.utils.entity_store import ConcurrencyConflictError, EntityExistsError, EntityStore


class TestEntityStore:
    def test_add_assigns_keys_and_etag(self, store, make_product):
        product = make_product()

        assert product.partition_key == "Product"
        assert product.row_key
        assert product.etag
        assert product.timestamp is not None
        assert store.get(Product, "Product", product.row_key) is product

    def test_get_unknown_returns_none(self, store):
        assert store.get(Product, "Product", "nope") is None

    def test_get_all_is_scoped_to_model(self, store, make_product, make_customer):
        make_product(name="A")
        make_product(name="B")
        make_customer()

        assert sorted(p.product_name for p in store.get_all(Product)) == ["A", "B"]
        assert len(store.get_all(Customer)) == 1

    def test_duplicate_key_is_rejected(self, store, make_product):
        product = make_product()

        with pytest.raises(EntityExistsError):
            store.add(Product(row_key=product.row_key, product_name="Copy", price=Decimal("1.00"),
                              stock_available=1))

    def test_update_with_current_etag_changes_it(self, store, make_product):
        product = make_product(price="9.99")
        old_etag = product.etag

        product.price = Decimal("11.00")
        store.update(product, old_etag)

        assert product.etag != old_etag
        assert store.get(Product, "Product", product.row_key).price == Decimal("11.00")

    def test_update_with_stale_etag_writes_nothing(self, store, make_product):
        product = make_product(price="9.99")
        stale = product.etag
        product.stock_available = 5
        store.update(product, stale)

        product.price = Decimal("1.00")
        with pytest.raises(ConcurrencyConflictError):
            store.update(product, stale)

        assert store.get(Product, "Product", product.row_key).price == Decimal("9.99")

    def test_delete(self, store, make_product):
        product = make_product()

        assert store.delete(Product, "Product", product.row_key) is True
        assert store.get(Product, "Product", product.row_key) is None
        assert store.delete(Product, "Product", product.row_key) is False


class TestConcurrentWriters:
    @pytest.fixture()
    def file_sessions(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'store.db'}")
        Base.metadata.create_all(bind=engine)
        factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        first, second = factory(), factory()
        yield first, second
        first.close()
        second.close()
        engine.dispose()

    def test_second_writer_gets_conflict(self, file_sessions):
        first, second = file_sessions
        key = EntityStore(first).add(Product(product_name="Webcam", price=Decimal("54.00"),
                                             stock_available=10)).row_key
        first_store, second_store = EntityStore(first), EntityStore(second)

        mine = first_store.get(Product, "Product", key)
        theirs = second_store.get(Product, "Product", key)
        theirs.stock_available = 9
        second_store.update(theirs, theirs.etag)

        mine.stock_available = 8
        with pytest.raises(ConcurrencyConflictError):
            first_store.update(mine, mine.etag)

        reloaded = first_store.get(Product, "Product", key)
        assert reloaded.stock_available == 9
        assert reloaded.etag == theirs.etag


class TestFailedWrites:
    def test_store_is_usable_after_rejected_update(self, store, make_product):
        product = make_product(stock=5)

        product.stock_available = -1
        with pytest.raises(IntegrityError):
            store.update(product, product.etag)

        assert store.get(Product, "Product", product.row_key).stock_available == 5
        assert make_product(name="Next").row_key

    def test_save_writes_all_or_nothing(self, store, make_product):
        product = make_product(stock=5)
        product.stock_available = 4
        rejected = Product(product_name="Broken", price=Decimal("-1.00"), stock_available=1)

        with pytest.raises(IntegrityError):
            store.save(adds=[rejected], updates=[(product, product.etag)])

        assert store.get(Product, "Product", product.row_key).stock_available == 5
        assert [p.product_name for p in store.get_all(Product)] == ["Wireless Mouse"]

    def test_save_with_stale_etag_writes_nothing(self, store, make_product):
        product = make_product(stock=5)
        stale = product.etag
        product.stock_available = 4
        store.update(product, stale)

        product.stock_available = 3
        with pytest.raises(ConcurrencyConflictError):
            store.save(adds=[Product(product_name="New", price=Decimal("1.00"), stock_available=1)],
                       updates=[(product, stale)])

        assert store.get(Product, "Product", product.row_key).stock_available == 4
        assert len(store.get_all(Product)) == 1

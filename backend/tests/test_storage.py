import threading
import unittest

from catalogshare.storage import MemStorage, UserNotFoundError


def _order_fields(user_id: int, total: float, **extra) -> dict:
    fields = {
        'order_number': 'ORD-1234',
        'customer_name': 'Test Customer',
        'customer_email': 'customer@test.local',
        'total_amount': total,
        'user_id': user_id,
    }
    fields.update(extra)
    return fields


def _items(product_id: int = 1) -> list[dict]:
    return [{'product_id': product_id, 'quantity': 1, 'price': 10.0}]


class EntityStoreTests(unittest.TestCase):
    def setUp(self):
        self.storage = MemStorage(password_rounds=4)
        self.user = self.storage.create_user({'username': 'merchant', 'password': 'secret'})
        self.category = self.storage.create_category({'name': 'Shoes', 'user_id': self.user.id})

    def _product(self, **overrides):
        fields = {
            'name': 'Runner',
            'sku': 'RUN-1',
            'price': 80.0,
            'stock': 10,
            'category_id': self.category.id,
            'user_id': self.user.id,
        }
        fields.update(overrides)
        return self.storage.create_product(fields)

    def test_ids_are_sequential_per_entity_type(self):
        first = self._product()
        second = self._product(sku='RUN-2')
        self.assertEqual(first.id, 1)
        self.assertEqual(second.id, 2)
        # categories have their own sequence
        self.assertEqual(self.category.id, 1)

    def test_ids_are_not_reused_after_delete(self):
        first = self._product()
        self.assertTrue(self.storage.delete_product(first.id))
        second = self._product(sku='RUN-2')
        self.assertEqual(second.id, 2)

    def test_missing_records_are_absent_not_errors(self):
        self.assertIsNone(self.storage.get_product(99))
        self.assertIsNone(self.storage.update_product(99, {'price': 1.0}))
        self.assertIsNone(self.storage.update_category(99, {'name': 'x'}))
        self.assertIsNone(self.storage.update_catalogue(99, {'name': 'x'}))
        self.assertIsNone(self.storage.update_order_status(99, 'shipped'))
        self.assertFalse(self.storage.delete_product(99))
        self.assertFalse(self.storage.delete_category(99))
        self.assertFalse(self.storage.delete_catalogue(99))

    def test_partial_update_preserves_untouched_fields(self):
        product = self._product()
        updated = self.storage.update_product(product.id, {'price': 50})
        self.assertEqual(updated.price, 50)
        self.assertEqual(updated.name, 'Runner')
        self.assertEqual(updated.sku, 'RUN-1')
        self.assertEqual(updated.stock, 10)
        self.assertEqual(updated.created_at, product.created_at)

    def test_stock_status_is_independent_of_stock(self):
        product = self._product(stock=0)
        self.assertEqual(product.stock_status, 'in_stock')
        updated = self.storage.update_product(product.id, {'stock_status': 'low_stock'})
        self.assertEqual(updated.stock, 0)
        self.assertEqual(updated.stock_status, 'low_stock')

    def test_list_filters_by_owner_in_insertion_order(self):
        other = self.storage.create_user({'username': 'other', 'password': 'x'})
        a = self._product(sku='A')
        self._product(sku='B', user_id=other.id)
        c = self._product(sku='C')
        self.assertEqual([p.id for p in self.storage.list_products(self.user.id)], [a.id, c.id])

    def test_list_products_by_category(self):
        other_category = self.storage.create_category({'name': 'Bags', 'user_id': self.user.id})
        a = self._product()
        self._product(sku='BAG-1', category_id=other_category.id)
        self.assertEqual([p.id for p in self.storage.list_products_by_category(self.category.id)], [a.id])

    def test_user_lookup_and_password_hash(self):
        found = self.storage.get_user_by_username('merchant')
        self.assertEqual(found.id, self.user.id)
        self.assertNotEqual(found.password_hash, 'secret')
        self.assertTrue(found.check_password('secret'))
        self.assertFalse(found.check_password('wrong'))
        self.assertIsNone(self.storage.get_user_by_username('nobody'))

    def test_update_store_settings_merges(self):
        self.storage.update_store_settings(self.user.id, {'store_name': 'Shop', 'whatsapp_number': '123'})
        user = self.storage.update_store_settings(self.user.id, {'store_name': 'Renamed'})
        self.assertEqual(user.store_name, 'Renamed')
        self.assertEqual(user.whatsapp_number, '123')
        self.assertEqual(user.primary_color, '#0f766e')

    def test_update_store_settings_raises_for_missing_user(self):
        with self.assertRaises(UserNotFoundError):
            self.storage.update_store_settings(404, {'store_name': 'Ghost'})


class CatalogueLinkTests(unittest.TestCase):
    def setUp(self):
        self.storage = MemStorage(password_rounds=4)
        self.catalogue = self.storage.create_catalogue({'name': 'Summer', 'user_id': 1})
        self.products = [
            self.storage.create_product({
                'name': f'P{i}', 'sku': f'SKU-{i}', 'price': 1.0, 'category_id': 1, 'user_id': 1,
            })
            for i in range(3)
        ]

    def test_new_catalogue_counters_start_at_zero(self):
        catalogue = self.storage.create_catalogue({'name': 'X', 'user_id': 1, 'view_count': 7, 'share_count': 3})
        self.assertEqual(catalogue.view_count, 0)
        self.assertEqual(catalogue.share_count, 0)
        self.assertTrue(catalogue.is_public)

    def test_adding_same_pair_twice_keeps_one_row(self):
        product = self.products[0]
        self.storage.add_product_to_catalogue(self.catalogue.id, product.id)
        self.storage.add_product_to_catalogue(self.catalogue.id, product.id)
        self.assertEqual(len(self.storage.catalogue_products), 1)
        listed = self.storage.list_products_in_catalogue(self.catalogue.id)
        self.assertEqual([p.id for p in listed], [product.id])

    def test_removing_missing_pair_is_noop(self):
        self.storage.remove_product_from_catalogue(self.catalogue.id, 42)
        self.assertEqual(len(self.storage.catalogue_products), 0)

    def test_delete_catalogue_cascades_links(self):
        other = self.storage.create_catalogue({'name': 'Winter', 'user_id': 1})
        for product in self.products:
            self.storage.add_product_to_catalogue(self.catalogue.id, product.id)
        self.storage.add_product_to_catalogue(other.id, self.products[0].id)

        self.assertTrue(self.storage.delete_catalogue(self.catalogue.id))

        self.assertEqual(self.storage.list_products_in_catalogue(self.catalogue.id), [])
        self.assertEqual(self.storage.catalogue_products.rows_for(self.catalogue.id), [])
        # other catalogues keep their links
        self.assertEqual(len(self.storage.list_products_in_catalogue(other.id)), 1)

    def test_deleting_product_leaves_dangling_link_that_readers_skip(self):
        for product in self.products:
            self.storage.add_product_to_catalogue(self.catalogue.id, product.id)
        self.storage.delete_product(self.products[1].id)

        self.assertTrue(self.storage.catalogue_products.contains(self.catalogue.id, self.products[1].id))
        listed = self.storage.list_products_in_catalogue(self.catalogue.id)
        self.assertEqual([p.id for p in listed], [self.products[0].id, self.products[2].id])

    def test_update_never_resets_counters(self):
        self.storage.increment_catalogue_view_count(self.catalogue.id)
        self.storage.increment_catalogue_share_count(self.catalogue.id)
        updated = self.storage.update_catalogue(self.catalogue.id, {'name': 'Renamed', 'view_count': 0})
        self.assertEqual(updated.name, 'Renamed')
        self.assertEqual(updated.view_count, 1)
        self.assertEqual(updated.share_count, 1)

    def test_view_count_increments_exactly(self):
        for _ in range(7):
            self.storage.increment_catalogue_view_count(self.catalogue.id)
        self.assertEqual(self.storage.get_catalogue(self.catalogue.id).view_count, 7)

    def test_increment_missing_catalogue_returns_none(self):
        self.assertIsNone(self.storage.increment_catalogue_view_count(99))
        self.assertIsNone(self.storage.increment_catalogue_share_count(99))

    def test_popular_catalogues_sorted_by_views(self):
        storage = MemStorage(password_rounds=4)
        views = [5, 1, 9, 3]
        created = []
        for i, count in enumerate(views):
            catalogue = storage.create_catalogue({'name': f'C{i}', 'user_id': 2})
            for _ in range(count):
                storage.increment_catalogue_view_count(catalogue.id)
            created.append(catalogue)

        popular = storage.list_popular_catalogues(2, 2)
        self.assertEqual([c.view_count for c in popular], [9, 5])
        self.assertEqual(len(storage.list_popular_catalogues(2)), 3)

    def test_popular_ties_keep_insertion_order(self):
        storage = MemStorage(password_rounds=4)
        first = storage.create_catalogue({'name': 'A', 'user_id': 2})
        second = storage.create_catalogue({'name': 'B', 'user_id': 2})
        self.assertEqual([c.id for c in storage.list_popular_catalogues(2)], [first.id, second.id])


class StatsConsistencyTests(unittest.TestCase):
    def setUp(self):
        self.storage = MemStorage(password_rounds=4)
        self.user_id = 5

    def test_stats_absent_until_first_mutation(self):
        self.assertIsNone(self.storage.get_store_stats(self.user_id))
        self.storage.create_catalogue({'name': 'C', 'user_id': self.user_id})
        self.assertIsNone(self.storage.get_store_stats(self.user_id))

    def test_order_creation_forces_pending(self):
        order = self.storage.create_order(_order_fields(self.user_id, 10.0, status='shipped'), _items())
        self.assertEqual(order.status, 'pending')
        self.assertEqual(order.created_at, order.updated_at)

    def test_order_stats_are_additive(self):
        amounts = [10.0, 25.5, 4.5, 60.0]
        for amount in amounts:
            self.storage.create_order(_order_fields(self.user_id, amount), _items())

        stats = self.storage.get_store_stats(self.user_id)
        self.assertEqual(stats.total_orders, len(amounts))
        self.assertAlmostEqual(stats.total_revenue, sum(amounts))
        self.assertEqual(stats.pending_orders, len(amounts))
        self.assertEqual(stats.orders_change, len(amounts))
        self.assertEqual(stats.revenue_change, 0)
        self.assertEqual(stats.processing_orders, 0)
        self.assertEqual(stats.completed_orders, 0)

    def test_status_bucket_accounting(self):
        order = self.storage.create_order(_order_fields(self.user_id, 20.0), _items())
        before = self.storage.get_store_stats(self.user_id)

        self.storage.update_order_status(order.id, 'processing')
        self.storage.update_order_status(order.id, 'shipped')
        self.storage.update_order_status(order.id, 'delivered')

        after = self.storage.get_store_stats(self.user_id)
        self.assertEqual(after.pending_orders, before.pending_orders - 1)
        self.assertEqual(after.processing_orders, before.processing_orders)
        self.assertEqual(after.completed_orders, before.completed_orders + 1)
        self.assertEqual(after.total_orders, before.total_orders)

    def test_any_transition_is_allowed(self):
        order = self.storage.create_order(_order_fields(self.user_id, 20.0), _items())
        self.storage.update_order_status(order.id, 'cancelled')
        reopened = self.storage.update_order_status(order.id, 'processing')
        self.assertEqual(reopened.status, 'processing')

        stats = self.storage.get_store_stats(self.user_id)
        self.assertEqual(stats.cancelled_orders, 0)
        self.assertEqual(stats.processing_orders, 1)
        self.assertEqual(stats.pending_orders, 0)

    def test_same_status_transition_nets_zero(self):
        order = self.storage.create_order(_order_fields(self.user_id, 20.0), _items())
        self.storage.update_order_status(order.id, 'pending')
        self.assertEqual(self.storage.get_store_stats(self.user_id).pending_orders, 1)

    def test_status_change_refreshes_updated_at(self):
        order = self.storage.create_order(_order_fields(self.user_id, 20.0), _items())
        updated = self.storage.update_order_status(order.id, 'shipped')
        self.assertGreaterEqual(updated.updated_at, order.updated_at)
        self.assertEqual(updated.created_at, order.created_at)

    def test_order_items_snapshot_price_and_get_own_ids(self):
        order = self.storage.create_order(
            _order_fields(self.user_id, 30.0),
            [
                {'product_id': 1, 'quantity': 1, 'price': 10.0},
                {'product_id': 2, 'quantity': 2, 'price': 10.0},
            ],
        )
        items = self.storage.list_order_items(order.id)
        self.assertEqual([i.id for i in items], [1, 2])
        self.assertTrue(all(i.order_id == order.id for i in items))
        self.assertEqual(sum(i.line_total for i in items), 30.0)

    def test_product_creation_updates_stats(self):
        for i in range(3):
            self.storage.create_product({
                'name': f'P{i}', 'sku': f'S{i}', 'price': 1.0, 'category_id': 1, 'user_id': self.user_id,
            })
        stats = self.storage.get_store_stats(self.user_id)
        self.assertEqual(stats.total_products, 3)
        self.assertEqual(stats.products_change, 3)

    def test_product_delete_does_not_touch_stats(self):
        product = self.storage.create_product({
            'name': 'P', 'sku': 'S', 'price': 1.0, 'category_id': 1, 'user_id': self.user_id,
        })
        self.storage.delete_product(product.id)
        self.assertEqual(self.storage.get_store_stats(self.user_id).total_products, 1)

    def test_share_updates_stats_but_view_does_not(self):
        catalogue = self.storage.create_catalogue({'name': 'C', 'user_id': self.user_id})
        self.storage.increment_catalogue_view_count(catalogue.id)
        self.assertIsNone(self.storage.get_store_stats(self.user_id))

        self.storage.increment_catalogue_share_count(catalogue.id)
        self.storage.increment_catalogue_share_count(catalogue.id)
        stats = self.storage.get_store_stats(self.user_id)
        self.assertEqual(stats.catalogues_shared, 2)
        self.assertEqual(stats.shares_change, 2)
        self.assertEqual(self.storage.get_catalogue(catalogue.id).share_count, 2)

    def test_apply_stats_delta_creates_zeroed_record_and_merges(self):
        stats = self.storage.apply_stats_delta(self.user_id, {'total_orders': 3, 'bogus': 1})
        self.assertEqual(stats.total_orders, 3)
        self.assertEqual(stats.total_revenue, 0)
        self.assertFalse(hasattr(stats, 'bogus'))

        again = self.storage.apply_stats_delta(self.user_id, {'pending_orders': 2})
        self.assertEqual(again.id, stats.id)
        self.assertEqual(again.total_orders, 3)
        self.assertEqual(again.pending_orders, 2)
        self.assertGreaterEqual(again.updated_at, stats.updated_at)

    def test_list_orders_newest_first_with_limit(self):
        orders = [self.storage.create_order(_order_fields(self.user_id, 1.0), _items()) for _ in range(7)]
        listed = self.storage.list_orders(self.user_id)
        self.assertEqual([o.id for o in listed], [o.id for o in reversed(orders)])
        self.assertEqual(len(self.storage.list_orders(self.user_id, 3)), 3)
        recent = self.storage.list_recent_orders(self.user_id)
        self.assertEqual([o.id for o in recent], [o.id for o in reversed(orders)][:5])


class ConcurrentMutationTests(unittest.TestCase):
    def test_threaded_increments_are_not_lost(self):
        storage = MemStorage(password_rounds=4)
        catalogue = storage.create_catalogue({'name': 'Hot', 'user_id': 1})
        per_thread = 200
        threads = [
            threading.Thread(
                target=lambda: [storage.increment_catalogue_share_count(catalogue.id) for _ in range(per_thread)]
            )
            for _ in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(storage.get_catalogue(catalogue.id).share_count, 8 * per_thread)
        self.assertEqual(storage.get_store_stats(1).catalogues_shared, 8 * per_thread)


if __name__ == '__main__':
    unittest.main()

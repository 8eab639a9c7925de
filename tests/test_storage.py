import tests
from docmodel.cf.storage import matches
from docmodel.cf.storage.memory import MemoryStorage


class StorageTest(tests.TestCase):

    def setUp(self):
        self.storage = MemoryStorage(tables={
            'users': [
                {'id': 1, 'name': 'Ann', 'role': 'admin'},
                {'id': 2, 'name': 'Bo', 'role': 'guest'},
                {'id': 3, 'name': 'Cy', 'role': 'admin'},
            ]
        })

    def test_matches(self):
        row = {'id': 1, 'name': 'Ann'}
        self.assertTrue(matches(row, {}))
        self.assertTrue(matches(row, {'name': 'Ann'}))
        self.assertFalse(matches(row, {'name': 'Bo'}))
        self.assertFalse(matches(row, {'email': None}))

    def test_matches_bool_is_not_int(self):
        self.assertFalse(matches({'id': 1}, {'id': True}))
        self.assertFalse(matches({'flag': True}, {'flag': 1}))
        self.assertTrue(matches({'flag': False}, {'flag': False}))
        self.assertTrue(matches({'score': 1}, {'score': 1.0}))
        self.assertIsNone(self.storage.find_one('users', {'id': True}))
        self.assertIsNone(self.storage.assign('users', {'id': True}, {'name': 'X'}))
        self.assertEqual(self.storage.remove('users', {'id': True}), 0)

    def test_tables(self):
        self.assertTrue(self.storage.has_table('users'))
        self.assertFalse(self.storage.has_table('posts'))
        self.assertEqual(self.storage.table('posts'), [])

        self.storage.create_table('posts')
        self.assertTrue(self.storage.has_table('posts'))
        self.assertEqual(self.storage.tables(), ['users', 'posts'])
        self.assertEqual(self.storage.writes, 1)

    def test_count(self):
        self.assertEqual(self.storage.count('users'), 3)
        self.assertEqual(self.storage.count('posts'), 0)

    def test_find_one(self):
        self.assertRowEqual(self.storage.find_one('users', {'role': 'admin'}),
                            {'id': 1, 'name': 'Ann', 'role': 'admin'})
        self.assertIsNone(self.storage.find_one('users', {'role': 'owner'}))
        self.assertIsNone(self.storage.find_one('posts', {'id': 1}))

    def test_filter(self):
        rows = self.storage.filter('users', lambda row: row['role'] == 'admin')
        self.assertEqual([row['name'] for row in rows], ['Ann', 'Cy'])
        self.assertEqual(self.storage.filter('posts', lambda row: True), [])

    def test_push(self):
        row = {'id': 4, 'name': 'Di'}
        stored = self.storage.push('users', row)

        # The storage keeps its own copy
        row['name'] = 'Ed'
        self.assertEqual(stored['name'], 'Di')
        self.assertEqual(self.storage.table('users')[-1], {'id': 4, 'name': 'Di'})
        self.assertEqual(self.storage.writes, 1)

    def test_push_new_table(self):
        self.storage.push('posts', {'id': 1})
        self.assertEqual(self.storage.table('posts'), [{'id': 1}])

    def test_assign(self):
        row = self.storage.assign('users', {'id': 2}, {'role': 'admin', 'age': 30})
        self.assertRowEqual(row, {'id': 2, 'name': 'Bo', 'role': 'admin', 'age': 30})
        self.assertEqual(self.storage.snapshot['users'][1], row)
        self.assertEqual(self.storage.writes, 1)

    def test_assign_first_match_only(self):
        self.storage.assign('users', {'role': 'admin'}, {'role': 'owner'})
        self.assertEqual([row['role'] for row in self.storage.table('users')],
                         ['owner', 'guest', 'admin'])

    def test_assign_no_match(self):
        self.assertIsNone(self.storage.assign('users', {'id': 9}, {'name': 'X'}))
        self.assertEqual(self.storage.writes, 0)

    def test_remove(self):
        self.assertEqual(self.storage.remove('users', {'role': 'admin'}), 2)
        self.assertEqual(self.storage.table('users'),
                         [{'id': 2, 'name': 'Bo', 'role': 'guest'}])
        self.assertEqual(self.storage.writes, 1)

        self.assertEqual(self.storage.remove('users', {'role': 'admin'}), 0)
        self.assertEqual(self.storage.writes, 1)

    def test_purge(self):
        self.storage.purge('users')
        self.assertTrue(self.storage.has_table('users'))
        self.assertEqual(self.storage.count('users'), 0)

    def test_batching(self):
        with self.storage as database:
            self.assertIs(database, self.storage)
            database.push('users', {'id': 4})
            with database:
                database.push('users', {'id': 5})
            self.assertEqual(self.storage.writes, 0)
            database.assign('users', {'id': 1}, {'name': 'Al'})

        self.assertEqual(self.storage.writes, 1)
        self.assertEqual(len(self.storage.snapshot['users']), 5)
        self.assertEqual(self.storage.snapshot['users'][0]['name'], 'Al')

    def test_batching_no_write(self):
        with self.storage:
            self.storage.find_one('users', {'id': 1})
        self.assertEqual(self.storage.writes, 0)

    def test_batching_exception(self):
        with self.assertRaises(RuntimeError):
            with self.storage:
                self.storage.push('users', {'id': 4})
                raise RuntimeError("interrupted")

        # The exception is not swallowed and the pending write still happens
        self.assertEqual(self.storage.writes, 1)

    def test_reload(self):
        self.storage.push('users', {'id': 4})
        self.storage.table('users').append({'id': 5})
        self.assertEqual(self.storage.count('users'), 5)

        # Unflushed changes are lost
        self.storage.reload()
        self.assertEqual(self.storage.count('users'), 4)

    def test_reload_initial(self):
        self.storage.table('users').clear()
        self.storage.reload()
        self.assertEqual(self.storage.count('users'), 3)

from unittest.mock import patch
import tests
from tests.models import Post, Tag, MEMORY_STORAGE


class ModelWhereTest(tests.TestCase):

    def setUp(self):
        with MEMORY_STORAGE:
            for row in (
                {'id': 1, 'title': 'First', 'user_id': 1, 'published': True, 'views': 1},
                {'id': 2, 'title': 'Second', 'user_id': 2, 'published': False, 'views': 0},
                {'id': 3, 'title': 'Third', 'user_id': 1, 'published': 1, 'views': 10},
                {'id': 4, 'title': 'Draft', 'user_id': 1},
            ):
                MEMORY_STORAGE.push('posts', row)

    def titles(self, posts):
        return [post.get('title') for post in posts]

    def test_all_matches(self):
        posts = Post().where({'user_id': 1})
        self.assertIsInstance(posts, list)
        self.assertEqual(self.titles(posts), ['First', 'Third', 'Draft'])
        self.assertTrue(all(post.exists for post in posts))

    def test_several_filters(self):
        posts = Post().where({'user_id': 1, 'views': 10})
        self.assertEqual(self.titles(posts), ['Third'])

    def test_empty_filters(self):
        self.assertEqual(len(Post().where({})), 4)

    def test_no_match(self):
        self.assertEqual(Post().where({'user_id': 3}), [])

    def test_limit_one(self):
        post = Post().where({'user_id': 1}, 1)
        self.assertIsInstance(post, Post)
        self.assertEqual(post.id, 1)

    def test_limit_one_no_match(self):
        query = Post()
        result = query.where({'user_id': 3}, 1)
        self.assertIs(result, query)
        self.assertFalse(result.exists)
        self.assertEqual(result.attributes, {})

    def test_limit(self):
        posts = Post().where({'user_id': 1}, 2)
        self.assertEqual(self.titles(posts), ['First', 'Third'])
        self.assertEqual(len(Post().where({'user_id': 1}, 10)), 3)

    def test_missing_attribute(self):
        posts = Post().where({'published': None})
        self.assertEqual(posts, [])

    def test_bool_is_not_int(self):
        self.assertEqual(self.titles(Post().where({'published': True})), ['First'])
        self.assertEqual(self.titles(Post().where({'published': 1})), ['Third'])
        self.assertEqual(self.titles(Post().where({'views': 1})), ['First'])
        self.assertEqual(self.titles(Post().where({'published': False})), ['Second'])
        self.assertEqual(self.titles(Post().where({'views': 0})), ['Second'])

    def test_getter_applied(self):
        MEMORY_STORAGE.push('tags', {'id': 1, 'label': 'Python'})
        MEMORY_STORAGE.push('tags', {'id': 2, 'label': 'Rust'})

        tags = Tag().where({'label': 'python'})
        self.assertEqual([tag.id for tag in tags], [1])
        self.assertEqual(Tag().where({'label': 'Python'}), [])

    def test_hydration(self):
        MEMORY_STORAGE.assign('posts', {'id': 2}, {'legacy': 'yes'})

        post = Post().where({'id': 2}, 1)
        # Stored attributes are loaded even when not fillable
        self.assertEqual(post.get('legacy'), 'yes')
        self.assertFalse(post.dirty)

    def test_fresh_instances(self):
        query = Post()
        posts = query.where({'user_id': 1})
        self.assertNotIn(query, posts)
        self.assertIsNot(posts[0], posts[1])
        self.assertIs(posts[0].storage, MEMORY_STORAGE)

    def test_single_row_result(self):
        query = Post()
        with patch.object(MEMORY_STORAGE, 'filter',
                          return_value={'id': 9, 'title': 'Legacy'}):
            result = query.where({'title': 'Legacy'})

        self.assertIs(result, query)
        self.assertEqual(result.id, 9)
        self.assertEqual(result.get('title'), 'Legacy')

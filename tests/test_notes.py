"""
Tests for the notes API.
"""

from apps.notes.models import Note

from .base import APITestCase, create_user


class NoteAPITests(APITestCase):

    url = '/api/notes/'

    def create_note(self, user=None, **fields):
        data = {'title': 'Lecture 1', 'content': 'Intro to graphs'}
        data.update(fields)
        return Note.objects.create(user=user or self.user, **data)

    def test_create(self):
        response = self.send_json('post', self.url, {
            'title': 'Lecture 2',
            'content': 'Shortest paths',
            'link': 'https://example.com/slides',
            'tag': ' algorithms ',
        })

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['tag'], 'algorithms')
        self.assertEqual(body['link'], 'https://example.com/slides')
        self.assertEqual(body['userId'], self.user.pk)

    def test_create_requires_title_and_content(self):
        response = self.send_json('post', self.url, {'title': ' ', 'content': ''})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(response.json()['errors']), {'title', 'content'})

    def test_invalid_link(self):
        response = self.send_json('post', self.url, {
            'title': 'Lecture', 'content': 'Notes', 'link': 'not a url',
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['errors']['link'], ['Invalid URL'])

    def test_list_filtered_by_tag(self):
        exam = self.create_note(tag='exam')
        self.create_note(tag='lecture')
        self.create_note(user=create_user(email='other@example.com'), tag='exam')

        response = self.get_json(self.url, tag='exam')

        self.assertEqual([n['id'] for n in response.json()], [exam.pk])

    def test_search(self):
        graphs = self.create_note(title='Graphs', content='BFS and DFS')
        self.create_note(title='Sorting', content='Quicksort')

        response = self.get_json(f'{self.url}search/', q='dfs')

        self.assertEqual([n['id'] for n in response.json()], [graphs.pk])

    def test_search_requires_query(self):
        response = self.get_json(f'{self.url}search/')
        self.assertEqual(response.status_code, 400)

    def test_stats(self):
        self.create_note(tag='exam')
        self.create_note(tag='exam')
        self.create_note(tag='lecture')
        self.create_note()

        stats = self.get_json(f'{self.url}stats/').json()

        self.assertEqual(stats, {'total': 4, 'untagged': 1, 'tags': {'exam': 2, 'lecture': 1}})

    def test_update_and_delete(self):
        note = self.create_note()
        detail = f'{self.url}{note.pk}/'

        updated = self.send_json('patch', detail, {'tag': 'review'}).json()
        deleted = self.send_json('delete', detail).json()

        self.assertEqual(updated['tag'], 'review')
        self.assertEqual(updated['title'], 'Lecture 1')
        self.assertEqual(deleted, {'message': 'Note deleted'})
        self.assertFalse(Note.objects.filter(pk=note.pk).exists())

    def test_other_users_note_is_404(self):
        theirs = self.create_note(user=create_user(email='other@example.com'))

        response = self.get_json(f'{self.url}{theirs.pk}/')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'error': 'Note not found'})

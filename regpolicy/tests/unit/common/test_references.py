#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

from regpolicy.common import references
from regpolicy.tests import base


class ScopeMatchesTestCase(base.TestCase):

    def test_exact(self):
        self.assertTrue(references.scope_matches('quay.io', 'quay.io'))

    def test_exact_parent(self):
        self.assertTrue(references.scope_matches('quay.io/ns/image',
                                                 'quay.io'))
        self.assertTrue(references.scope_matches('quay.io/ns/image',
                                                 'quay.io/ns'))

    def test_exact_is_not_a_string_prefix(self):
        self.assertFalse(references.scope_matches('quay.io.example.com',
                                                  'quay.io'))
        self.assertFalse(references.scope_matches('quay.io/ns-other',
                                                  'quay.io/ns'))

    def test_child_does_not_cover_parent(self):
        self.assertFalse(references.scope_matches('quay.io', 'quay.io/ns'))

    def test_wildcard(self):
        self.assertTrue(references.scope_matches('foo.example.com',
                                                 '*.example.com'))
        self.assertTrue(references.scope_matches('a.b.example.com',
                                                 '*.example.com'))

    def test_wildcard_with_repository(self):
        self.assertTrue(references.scope_matches('foo.example.com/bar',
                                                 '*.example.com'))

    def test_wildcard_needs_subdomain(self):
        self.assertFalse(references.scope_matches('example.com',
                                                  '*.example.com'))
        self.assertFalse(references.scope_matches('badexample.com',
                                                  '*.example.com'))

    def test_wildcard_only_matches_host(self):
        self.assertFalse(references.scope_matches('quay.io/foo.example.com',
                                                  '*.example.com'))

    def test_wildcard_candidate(self):
        self.assertTrue(references.scope_matches('*.blocked.example.com',
                                                 '*.example.com'))
        self.assertTrue(references.scope_matches('*.example.com',
                                                 '*.example.com'))
        self.assertFalse(references.scope_matches('*.example.com',
                                                  '*.blocked.example.com'))

    def test_matches(self):
        entries = ['block.io', '*.example.com']
        self.assertTrue(references.matches('block.io/ns', entries))
        self.assertTrue(references.matches('a.example.com', entries))
        self.assertFalse(references.matches('quay.io', entries))
        self.assertFalse(references.matches('quay.io', []))
        self.assertFalse(references.matches('quay.io', None))

    def test_matching_entries(self):
        entries = ['quay.io', 'block.io', 'quay.io/ns', '*.io']
        self.assertEqual(['quay.io', 'quay.io/ns'],
                         references.matching_entries('quay.io/ns/image',
                                                     entries[:3]))
        self.assertEqual(['block.io', '*.io'],
                         references.matching_entries('block.io', entries))


class RepositoryTestCase(base.TestCase):

    def test_digest(self):
        self.assertEqual(
            'quay.io/openshift-release-dev',
            references.repository('quay.io/openshift-release-dev@sha256:'
                                  + 'a' * 64))

    def test_tag(self):
        self.assertEqual('quay.io/ns/image',
                         references.repository('quay.io/ns/image:4.12'))

    def test_tag_and_digest(self):
        self.assertEqual(
            'quay.io/x',
            references.repository('quay.io/x:4.12@sha256:' + 'a' * 64))
        self.assertEqual(
            'registry:5000/ns/image',
            references.repository('registry:5000/ns/image:v1@sha256:'
                                  + 'b' * 64))

    def test_plain(self):
        self.assertEqual('release-reg.io/image/release',
                         references.repository(
                             'release-reg.io/image/release'))

    def test_registry_port(self):
        self.assertEqual('registry:5000/ns/image',
                         references.repository('registry:5000/ns/image'))
        self.assertEqual('registry:5000/ns/image',
                         references.repository('registry:5000/ns/image:v1'))


class HelpersTestCase(base.TestCase):

    def test_is_wildcard(self):
        self.assertTrue(references.is_wildcard('*.example.com'))
        self.assertFalse(references.is_wildcard('example.com'))
        self.assertFalse(references.is_wildcard('*example.com'))

    def test_registry_host(self):
        self.assertEqual('quay.io', references.registry_host('quay.io/ns/i'))
        self.assertEqual('quay.io', references.registry_host('quay.io'))

    def test_is_digest_reference(self):
        self.assertTrue(references.is_digest_reference(
            'quay.io/ns/image@sha256:' + 'a' * 64))
        self.assertTrue(references.is_digest_reference(
            'quay.io/ns/image:4.12@sha256:' + 'a' * 64))
        self.assertFalse(references.is_digest_reference(
            'quay.io/ns/image:4.12'))
        self.assertFalse(references.is_digest_reference('quay.io/ns/image'))

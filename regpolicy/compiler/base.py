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

import collections
import enum


class PullMode(enum.Enum):
    """Which image references a mirror may serve.

    The values are the ``pull-from-mirror`` values of registries.conf.
    """
    DIGEST_ONLY = 'digest-only'
    TAG_ONLY = 'tag-only'

    def __str__(self):
        return self.value


class SourcePolicy(enum.Enum):
    """Whether a mirrored source may still be contacted directly.

    The values are the ``mirrorSourcePolicy`` values of the mirror set
    resources.
    """
    UNSET = ''
    NEVER_CONTACT = 'NeverContactSource'
    ALLOW_CONTACT = 'AllowContactingSource'

    def __str__(self):
        return self.value


class MirrorRecord(object):
    """A source and its mirrors, as declared by one mirror-rule resource."""

    def __init__(self, source, mirrors, source_policy=None):
        self.source = source
        self.mirrors = tuple(mirrors or ())
        self.source_policy = SourcePolicy(source_policy or SourcePolicy.UNSET)

    def __eq__(self, other):
        if not isinstance(other, MirrorRecord):
            return NotImplemented
        return ((self.source, self.mirrors, self.source_policy)
                == (other.source, other.mirrors, other.source_policy))

    def __repr__(self):
        return ('MirrorRecord(source=%r, mirrors=%r, source_policy=%s)'
                % (self.source, list(self.mirrors), self.source_policy.name))


MirrorRuleSet = collections.namedtuple('MirrorRuleSet', ['name', 'records'])

MirrorDirective = collections.namedtuple('MirrorDirective',
                                         ['source', 'mirror', 'pull_mode'])


def records_of(rule_sets):
    """Iterate over the records of a collection of rule sets.

    A rule set is either a :class:`MirrorRuleSet` or a plain iterable of
    :class:`MirrorRecord`.
    """
    for rule_set in rule_sets or ():
        if isinstance(rule_set, MirrorRuleSet):
            yield from rule_set.records
        else:
            yield from rule_set

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

"""Rule set builders for compiler tests."""

from regpolicy.compiler import base

NEVER = base.SourcePolicy.NEVER_CONTACT
ALLOW = base.SourcePolicy.ALLOW_CONTACT


def rule_set(*records, name='test'):
    """Build a rule set from ``(source, mirrors[, policy])`` tuples."""
    return base.MirrorRuleSet(name, [base.MirrorRecord(*record)
                                     for record in records])


WILDCARD_ICSP = [rule_set(
    ('insecure.com/ns-i1', ['blocked.com/ns-b1', 'other.com/ns-o1']),
    ('blocked.com/ns-b/ns2-b', ['other.com/ns-o2', 'insecure.com/ns-i2']),
    ('other.com/ns-o3', ['insecure.com/ns-i2', 'blocked.com/ns-b/ns3-b',
                         'foo.insecure-example.com/bar']),
)]

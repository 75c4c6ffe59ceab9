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

"""Flatten mirror-rule resources into mirror directives."""

from oslo_log import log

from regpolicy.compiler import base


LOG = log.getLogger(__name__)


def normalize(icsp_rules=None, idms_rules=None, itms_rules=None):
    """Flatten the three kinds of mirror-rule resources.

    :param icsp_rules: ImageContentSourcePolicy rule sets (digest only).
    :param idms_rules: ImageDigestMirrorSet rule sets (digest only).
    :param itms_rules: ImageTagMirrorSet rule sets (tag only).
    :returns: A list of :class:`base.MirrorDirective` in resource, record and
        mirror order, digest-only directives first. Duplicates are kept.
    """
    directives = []
    for rule_sets, pull_mode in ((icsp_rules, base.PullMode.DIGEST_ONLY),
                                 (idms_rules, base.PullMode.DIGEST_ONLY),
                                 (itms_rules, base.PullMode.TAG_ONLY)):
        for record in base.records_of(rule_sets):
            for mirror in record.mirrors:
                directives.append(
                    base.MirrorDirective(record.source, mirror, pull_mode))
    LOG.debug("Normalized mirror rules into %d directives", len(directives))
    return directives


def group_by_source(directives):
    """Group directives by source, keeping their relative order."""
    grouped = {}
    for directive in directives:
        grouped.setdefault(directive.source, []).append(directive)
    return grouped


def source_policies(idms_rules=None, itms_rules=None):
    """Return the declared source policy of every source.

    Only sources with an explicit policy are returned; when several records
    declare one, the first wins. Conflicting declarations are rejected by
    :func:`regpolicy.compiler.validation.validate_registries_conf_scopes`.
    """
    policies = {}
    for record in base.records_of(idms_rules):
        if record.source_policy is not base.SourcePolicy.UNSET:
            policies.setdefault(record.source, record.source_policy)
    for record in base.records_of(itms_rules):
        if record.source_policy is not base.SourcePolicy.UNSET:
            policies.setdefault(record.source, record.source_policy)
    return policies

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

from oslo_log import log

from regpolicy.common import exception
from regpolicy.common import references
from regpolicy.compiler import base


LOG = log.getLogger(__name__)


def _check_registry_list(category, entries):
    for entry in entries or ():
        if not entry:
            raise exception.InvalidRegistryScope(category=category,
                                                 entry=entry)


def _check_records(records):
    for record in records:
        if not record.source:
            raise exception.EmptyMirrorEntry(field='source')
    for record in records:
        if any(not mirror for mirror in record.mirrors):
            raise exception.EmptyMirrorEntry(field='mirror')
    for record in records:
        if (record.source_policy is base.SourcePolicy.NEVER_CONTACT
                and record.source in record.mirrors):
            raise exception.SourceMirrorsItself(source=record.source)


def _check_source_policies(records):
    declared = {}
    for record in records:
        if record.source_policy is base.SourcePolicy.UNSET:
            continue
        seen = declared.setdefault(record.source, record.source_policy)
        if seen is not record.source_policy:
            raise exception.MirrorSourcePolicyConflict(source=record.source)


def validate_registries_conf_scopes(insecure, blocked, allowed,
                                    icsp_rules=None, idms_rules=None,
                                    itms_rules=None):
    """Reject malformed or contradictory registry configuration.

    Checks run in a fixed order and the first failure is raised.

    :param insecure: Insecure registry entries.
    :param blocked: Blocked registry entries.
    :param allowed: Allowed registry entries.
    :param icsp_rules: ImageContentSourcePolicy rule sets.
    :param idms_rules: ImageDigestMirrorSet rule sets.
    :param itms_rules: ImageTagMirrorSet rule sets.
    :raises: InvalidRegistryScope for empty entries or mirrored wildcard
        sources.
    :raises: MirrorSourcePolicyConflict if a NeverContactSource record
        mirrors to itself, or a source has contradictory source policies.
    """
    try:
        _check_registry_list('insecure', insecure)
        _check_registry_list('blocked', blocked)
        _check_registry_list('allowed', allowed)

        records = (list(base.records_of(icsp_rules))
                   + list(base.records_of(idms_rules))
                   + list(base.records_of(itms_rules)))
        _check_records(records)

        # ImageContentSourcePolicy records carry no source policy.
        _check_source_policies(list(base.records_of(idms_rules))
                               + list(base.records_of(itms_rules)))

        for record in records:
            if record.mirrors and references.is_wildcard(record.source):
                raise exception.WildcardSourceMirrored(source=record.source)
    except exception.Invalid as e:
        LOG.error("Rejected registry configuration: %s", e)
        raise

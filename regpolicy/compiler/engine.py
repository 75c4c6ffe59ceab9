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

from oslo_log import log

from regpolicy.common import exception
from regpolicy.common.i18n import _
from regpolicy.compiler import payload
from regpolicy.compiler import registries
from regpolicy.compiler import signature
from regpolicy.compiler import validation


LOG = log.getLogger(__name__)

CompiledConfiguration = collections.namedtuple('CompiledConfiguration',
                                               ['registries', 'policy'])


class ConfigurationSnapshot(object):
    """The registry configuration inputs of one compilation."""

    def __init__(self, release_image, insecure=None, blocked=None,
                 allowed=None, icsp_rules=None, idms_rules=None,
                 itms_rules=None):
        self.release_image = release_image
        self.insecure = list(insecure or [])
        self.blocked = list(blocked or [])
        self.allowed = list(allowed or [])
        self.icsp_rules = list(icsp_rules or [])
        self.idms_rules = list(idms_rules or [])
        self.itms_rules = list(itms_rules or [])


def _merge(entries, extra):
    merged = list(entries)
    merged.extend(entry for entry in extra if entry not in merged)
    return merged


def compile_configuration(snapshot, registries_template=None,
                          policy_template=None):
    """Compile registries.conf and policy.json from a snapshot.

    Input is validated and the payload checked before either document is
    compiled; any failure aborts the whole compilation.

    :param snapshot: A :class:`ConfigurationSnapshot`.
    :param registries_template: Base registries.conf; the built-in template
        when None.
    :param policy_template: Base policy.json; the built-in template when
        None.
    :returns: A :class:`CompiledConfiguration` of two byte strings.
    :raises: Invalid, UnpullablePayload or TemplateError.
    """
    if not snapshot.release_image:
        raise exception.Invalid(
            _('a release payload image reference is required'))

    validation.validate_registries_conf_scopes(
        snapshot.insecure, snapshot.blocked, snapshot.allowed,
        snapshot.icsp_rules, snapshot.idms_rules, snapshot.itms_rules)

    registries_blocked, policy_blocked, payload_allowed = (
        payload.get_valid_blocked_and_allowed_registries(
            snapshot.release_image, snapshot.blocked, snapshot.icsp_rules,
            snapshot.idms_rules, snapshot.itms_rules))

    if registries_template is None:
        registries_template = registries.DEFAULT_TEMPLATE
    if policy_template is None:
        policy_template = signature.DEFAULT_TEMPLATE

    registries_conf = registries.update_registries_config(
        registries_template, snapshot.insecure, registries_blocked,
        snapshot.icsp_rules, snapshot.idms_rules, snapshot.itms_rules)
    policy_json = signature.update_policy_json(
        policy_template, policy_blocked,
        _merge(snapshot.allowed, payload_allowed), snapshot.release_image)

    LOG.info("Compiled registry configuration for release payload "
             "%(image)s: %(insecure)d insecure, %(blocked)d blocked, "
             "%(allowed)d allowed entries",
             {'image': snapshot.release_image,
              'insecure': len(snapshot.insecure),
              'blocked': len(registries_blocked),
              'allowed': len(snapshot.allowed)})
    return CompiledConfiguration(registries_conf, policy_json)

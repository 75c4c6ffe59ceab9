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

"""Compile the containers-policy.json(5) signature verification policy.

The consuming runtime resolves the most specific scope matching an image,
so narrow accept scopes override broader reject scopes and vice versa. Only
the ``docker`` and ``atomic`` transports are written; everything else in the
template, ``docker-daemon`` included, is carried through untouched.
"""

from oslo_log import log
from oslo_serialization import jsonutils

from regpolicy.common import exception
from regpolicy.common.i18n import _
from regpolicy.common import references


LOG = log.getLogger(__name__)

TRANSPORTS = ('docker', 'atomic')

(
    REJECT,
    INSECURE_ACCEPT_ANYTHING,
) = (
    'reject',
    'insecureAcceptAnything',
)

DEFAULT_TEMPLATE = jsonutils.dump_as_bytes({
    'default': [{'type': INSECURE_ACCEPT_ANYTHING}],
    'transports': {
        'docker-daemon': {
            '': [{'type': INSECURE_ACCEPT_ANYTHING}],
        },
    },
})


def _requirement(verdict):
    return [{'type': verdict}]


def update_policy_json(template, blocked, allowed, release_image):
    """Merge registry trust rules into a policy.json template.

    With only ``allowed`` set, everything outside the allowed scopes is
    rejected. With ``blocked`` set, the template default is kept, blocked
    scopes are rejected and ``allowed`` holds narrower exceptions, normally
    the payload repository returned by
    ``payload.get_valid_blocked_and_allowed_registries``.

    :param template: The base document, JSON as bytes or str.
    :param blocked: Blocked registry entries.
    :param allowed: Allowed registry entries.
    :param release_image: The release payload image reference.
    :returns: The compiled document as UTF-8 encoded JSON.
    :raises: UnpullablePayload if ``allowed`` is set but does not cover the
        release payload.
    :raises: PolicyConfigError if the template cannot be parsed or the
        result cannot be serialized.
    """
    try:
        policy = jsonutils.loads(template)
    except (ValueError, TypeError) as e:
        LOG.error("Unable to parse policy template: %s", e)
        raise exception.PolicyConfigError(
            reason=_('error parsing template: %s') % e)
    if not isinstance(policy, dict):
        raise exception.PolicyConfigError(
            reason=_('template is not a JSON object'))

    blocked = blocked or []
    allowed = allowed or []
    payload = references.repository(release_image)

    if allowed and not references.matches(payload, allowed):
        LOG.error("Allowed registries %(allowed)s do not include the "
                  "release payload %(payload)s",
                  {'allowed': allowed, 'payload': payload})
        raise exception.UnpullablePayload(
            image=release_image,
            reason=_('it is not covered by the allowed registries %s')
            % ', '.join(allowed))

    scopes = {}
    if allowed and not blocked:
        policy['default'] = _requirement(REJECT)
    for entry in blocked:
        scopes[entry] = REJECT
    for entry in allowed:
        scopes[entry] = INSECURE_ACCEPT_ANYTHING
    if references.matches(payload, blocked):
        LOG.warning("Release payload %(payload)s is covered by blocked "
                    "registries, adding an accept scope for it",
                    {'payload': payload})
        scopes[payload] = INSECURE_ACCEPT_ANYTHING

    if scopes:
        transports = policy.setdefault('transports', {})
        for transport in TRANSPORTS:
            transport_scopes = transports.setdefault(transport, {})
            for scope, verdict in scopes.items():
                transport_scopes[scope] = _requirement(verdict)

    try:
        result = jsonutils.dump_as_bytes(policy)
    except (TypeError, ValueError) as e:
        LOG.error("Unable to serialize signature policy: %s", e)
        raise exception.PolicyConfigError(reason=str(e))

    LOG.debug("Compiled signature policy with %(count)d scopes per "
              "transport", {'count': len(scopes)})
    return result

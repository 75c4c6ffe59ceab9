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
from regpolicy.common.i18n import _
from regpolicy.common import references
from regpolicy.compiler import base
from regpolicy.compiler import normalizer


LOG = log.getLogger(__name__)


def _mirrored_repository(payload, directive):
    """Where ``payload`` is pulled from when redirected by ``directive``."""
    return directive.mirror + payload[len(directive.source):]


def get_valid_blocked_and_allowed_registries(release_image, blocked,
                                             icsp_rules=None,
                                             idms_rules=None,
                                             itms_rules=None):
    """Make sure blocking registries leaves the release payload pullable.

    A blocked payload registry is acceptable as long as a mirror rule
    redirects the payload repository to a mirror which is not blocked
    itself. The payload repository is then returned as an allowed entry, so
    the signature policy can accept it despite the broader block.

    Only mirrors that serve the pull mode of ``release_image`` count: digest
    mirrors for a ``@digest`` reference, tag mirrors otherwise.

    :param release_image: The release payload image reference.
    :param blocked: Blocked registry entries.
    :param icsp_rules: ImageContentSourcePolicy rule sets.
    :param idms_rules: ImageDigestMirrorSet rule sets.
    :param itms_rules: ImageTagMirrorSet rule sets.
    :returns: A tuple of the blocked entries for registries.conf, the
        blocked entries for policy.json and the allowed entries to add.
    :raises: UnpullablePayload if the payload is blocked and no unblocked
        mirror serves it.
    """
    blocked = list(blocked or [])
    payload = references.repository(release_image)
    blocking = references.matching_entries(payload, blocked)
    if not blocking:
        return list(blocked), list(blocked), []

    remaining = [entry for entry in blocked if entry not in blocking]
    # Digest mirrors only serve digest pulls and tag mirrors only tag pulls.
    if references.is_digest_reference(release_image):
        pull_mode = base.PullMode.DIGEST_ONLY
    else:
        pull_mode = base.PullMode.TAG_ONLY
    directives = [
        directive for directive in normalizer.normalize(
            icsp_rules, idms_rules, itms_rules)
        if directive.pull_mode is pull_mode
        and not references.is_wildcard(directive.source)
        and references.scope_matches(payload, directive.source)]

    if not directives:
        LOG.error("Release payload %(payload)s is blocked by %(blocking)s "
                  "and has no %(mode)s mirror configured",
                  {'payload': payload, 'blocking': blocking,
                   'mode': pull_mode})
        raise exception.UnpullablePayload(
            image=release_image,
            reason=_('its repository is blocked by %(blocking)s and no '
                     '%(mode)s mirror is configured for it') % {
                         'blocking': ', '.join(blocking), 'mode': pull_mode},
            registries_blocked=remaining, policy_blocked=remaining)

    mirrors = [_mirrored_repository(payload, directive)
               for directive in directives]
    if all(references.matches(mirror, blocked) for mirror in mirrors):
        LOG.error("Release payload %(payload)s is blocked and all of its "
                  "mirrors %(mirrors)s are blocked too",
                  {'payload': payload, 'mirrors': mirrors})
        raise exception.UnpullablePayload(
            image=release_image,
            reason=_('its repository is blocked by %(blocking)s and its '
                     'mirrors %(mirrors)s are blocked too') % {
                         'blocking': ', '.join(blocking),
                         'mirrors': ', '.join(mirrors)},
            registries_blocked=remaining, policy_blocked=remaining)

    LOG.info("Release payload %(payload)s is blocked by %(blocking)s but "
             "remains pullable through its mirrors",
             {'payload': payload, 'blocking': blocking})
    return list(blocked), list(blocked), [payload]

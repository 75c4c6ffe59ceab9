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

"""Compile the registries.conf mirror configuration.

The document follows the containers-registries.conf(5) version 2 format::

    unqualified-search-registries = ["registry.access.redhat.com"]

    [[registry]]
    location = "quay.io/openshift"
    blocked = true

    [[registry.mirror]]
    location = "mirror.example.com/openshift"
    pull-from-mirror = "digest-only"
"""

import copy
import tomllib

from oslo_log import log
import tomli_w

from regpolicy.common import exception
from regpolicy.common.i18n import _
from regpolicy.common import references
from regpolicy.compiler import base
from regpolicy.compiler import normalizer


LOG = log.getLogger(__name__)

REGISTRIES_KEY = 'registry'
MIRRORS_KEY = 'mirror'

DEFAULT_TEMPLATE = tomli_w.dumps({
    'unqualified-search-registries': ['registry.access.redhat.com',
                                      'docker.io'],
}).encode('utf-8')


def _decode(document):
    if isinstance(document, bytes):
        return document.decode('utf-8')
    return document


def entry_key(entry):
    """The prefix an entry applies to; its location unless set."""
    return entry.get('prefix') or entry.get('location', '')


class RegistryEntries(object):
    """The ``[[registry]]`` tables of a document, keyed by prefix.

    Looking up a key that has no entry yet creates one, so flags are always
    merged into a single entry per key.
    """

    def __init__(self, entries=None):
        self._entries = {}
        for entry in entries or ():
            self._entries[entry_key(entry)] = entry

    def __contains__(self, key):
        return key in self._entries

    def __len__(self):
        return len(self._entries)

    def get(self, key):
        if key not in self._entries:
            if references.is_wildcard(key):
                self._entries[key] = {'prefix': key}
            else:
                self._entries[key] = {'location': key}
        return self._entries[key]

    def mark(self, key, blocked=False, insecure=False):
        entry = self.get(key)
        if blocked:
            entry['blocked'] = True
        if insecure:
            entry['insecure'] = True
        return entry

    def blocked_wildcards(self):
        """Wildcard keys of the entries emitted as blocked so far."""
        return [key for key, entry in self._entries.items()
                if references.is_wildcard(key) and entry.get('blocked')]

    def as_list(self):
        return list(self._entries.values())


def _mirror_endpoint(directive, insecure):
    endpoint = {'location': directive.mirror}
    if references.matches(directive.mirror, insecure):
        endpoint['insecure'] = True
    endpoint['pull-from-mirror'] = directive.pull_mode.value
    return endpoint


def update_registries_config(template, insecure, blocked, icsp_rules=None,
                             idms_rules=None, itms_rules=None):
    """Merge registry rules into a registries.conf template.

    The input is expected to have passed
    :func:`regpolicy.compiler.validation.validate_registries_conf_scopes`.

    :param template: The base document, TOML as bytes or str.
    :param insecure: Insecure registry entries.
    :param blocked: Blocked registry entries.
    :param icsp_rules: ImageContentSourcePolicy rule sets.
    :param idms_rules: ImageDigestMirrorSet rule sets.
    :param itms_rules: ImageTagMirrorSet rule sets.
    :returns: The compiled document as UTF-8 encoded TOML.
    :raises: RegistriesConfigError if the template cannot be parsed or the
        result cannot be serialized.
    """
    try:
        document = tomllib.loads(_decode(template))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        LOG.error("Unable to parse registries template: %s", e)
        raise exception.RegistriesConfigError(
            reason=_('error parsing template: %s') % e)

    insecure = insecure or []
    blocked = blocked or []
    entries = RegistryEntries(copy.deepcopy(document.get(REGISTRIES_KEY)))

    directives = normalizer.normalize(icsp_rules, idms_rules, itms_rules)
    policies = normalizer.source_policies(idms_rules, itms_rules)
    for source, mirrored in sorted(
            normalizer.group_by_source(directives).items()):
        if references.is_wildcard(source):
            LOG.warning("Ignoring mirrors of wildcard source %s", source)
            continue
        never_contact = (policies.get(source)
                         is base.SourcePolicy.NEVER_CONTACT)
        entry = entries.mark(
            source,
            blocked=never_contact or references.matches(source, blocked),
            insecure=references.matches(source, insecure))
        entry.setdefault(MIRRORS_KEY, []).extend(
            _mirror_endpoint(directive, insecure) for directive in mirrored)

    for entry in blocked:
        if (entry not in entries
                and references.matches(entry, entries.blocked_wildcards())):
            LOG.debug("Blocked entry %s is covered by a blocked wildcard",
                      entry)
            continue
        entries.mark(entry, blocked=True,
                     insecure=references.matches(entry, insecure))
    for entry in insecure:
        entries.mark(entry, insecure=True,
                     blocked=references.matches(entry, blocked))

    if len(entries):
        document[REGISTRIES_KEY] = entries.as_list()

    try:
        result = tomli_w.dumps(document)
    except (TypeError, ValueError) as e:
        LOG.error("Unable to serialize registries configuration: %s", e)
        raise exception.RegistriesConfigError(reason=str(e))

    LOG.debug("Compiled registries configuration with %(count)d registry "
              "entries from %(directives)d mirror directives",
              {'count': len(entries), 'directives': len(directives)})
    return result.encode('utf-8')

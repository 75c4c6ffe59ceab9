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

"""Load registry sources and mirror rules from resource manifests."""

import jsonschema
from oslo_log import log
import yaml

from regpolicy.common import exception
from regpolicy.common.i18n import _
from regpolicy.compiler import base
from regpolicy.compiler import schemas


LOG = log.getLogger(__name__)


def _flatten(document):
    if isinstance(document, dict) and document.get('kind') == 'List':
        for item in document.get('items') or ():
            yield from _flatten(item)
    elif document is not None:
        yield document


def load_manifests(paths):
    """Read resource manifests from YAML files.

    Files may hold several documents and ``kind: List`` resources.

    :param paths: Iterable of file paths.
    :returns: A list of resource dicts, in file and document order.
    :raises: InvalidResource if a file is not valid YAML.
    """
    documents = []
    for path in paths:
        LOG.debug("Loading resource manifests from %s", path)
        try:
            with open(path, 'r') as f:
                for document in yaml.safe_load_all(f):
                    documents.extend(_flatten(document))
        except yaml.YAMLError as e:
            LOG.error("Error parsing YAML in manifest file %s: %s", path, e)
            raise exception.InvalidResource(kind='manifest', name=path,
                                            reason=e)
    return documents


def _name(document):
    return (document.get('metadata') or {}).get('name', '<unnamed>')


def _validate(document):
    kind = document['kind']
    try:
        jsonschema.validate(document, schemas.SCHEMAS[kind])
    except jsonschema.ValidationError as e:
        raise exception.InvalidResource(kind=kind, name=_name(document),
                                        reason=e.message)


def _rule_set(document):
    kind = document['kind']
    records_key = schemas.RECORDS_KEYS[kind]
    records = []
    for item in (document.get('spec') or {}).get(records_key) or ():
        # ImageContentSourcePolicy records have no source policy.
        policy = (None if kind == schemas.KIND_ICSP
                  else item.get('mirrorSourcePolicy'))
        records.append(base.MirrorRecord(item['source'], item.get('mirrors'),
                                         policy))
    return base.MirrorRuleSet(_name(document), records)


def rule_sets_from_manifests(documents):
    """Build mirror rule sets from resource manifests.

    :param documents: Resource dicts, as returned by :func:`load_manifests`.
    :returns: A tuple of the ImageContentSourcePolicy, ImageDigestMirrorSet
        and ImageTagMirrorSet rule sets, each a list in document order.
    :raises: InvalidResource if a mirror resource is malformed.
    """
    rule_sets = {schemas.KIND_ICSP: [], schemas.KIND_IDMS: [],
                 schemas.KIND_ITMS: []}
    for document in documents:
        kind = document.get('kind') if isinstance(document, dict) else None
        if kind not in rule_sets:
            if kind != schemas.KIND_IMAGE:
                LOG.warning("Skipping resource of unsupported kind %s", kind)
            continue
        _validate(document)
        rule_sets[kind].append(_rule_set(document))

    LOG.debug("Loaded %(icsp)d ImageContentSourcePolicy, %(idms)d "
              "ImageDigestMirrorSet and %(itms)d ImageTagMirrorSet "
              "resources",
              {'icsp': len(rule_sets[schemas.KIND_ICSP]),
               'idms': len(rule_sets[schemas.KIND_IDMS]),
               'itms': len(rule_sets[schemas.KIND_ITMS])})
    return (rule_sets[schemas.KIND_ICSP], rule_sets[schemas.KIND_IDMS],
            rule_sets[schemas.KIND_ITMS])


def registry_sources_from_manifests(documents):
    """Read the registry lists of the first Image resource.

    :param documents: Resource dicts, as returned by :func:`load_manifests`.
    :returns: A tuple of the insecure, blocked and allowed registry lists;
        empty lists without an Image resource.
    :raises: InvalidResource if the Image resource is malformed.
    """
    for document in documents:
        if (not isinstance(document, dict)
                or document.get('kind') != schemas.KIND_IMAGE):
            continue
        _validate(document)
        sources = ((document.get('spec') or {}).get('registrySources')
                   or {})
        if (sources.get('blockedRegistries')
                and sources.get('allowedRegistries')):
            raise exception.InvalidResource(
                kind=schemas.KIND_IMAGE, name=_name(document),
                reason=_('only one of allowedRegistries or '
                         'blockedRegistries may be specified'))
        return (list(sources.get('insecureRegistries') or []),
                list(sources.get('blockedRegistries') or []),
                list(sources.get('allowedRegistries') or []))
    return [], [], []

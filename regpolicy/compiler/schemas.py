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

"""JSON schemas of the resources mirror rules are loaded from."""

import copy

from regpolicy.compiler import base

(
    KIND_IMAGE,
    KIND_ICSP,
    KIND_IDMS,
    KIND_ITMS,
) = (
    'Image',
    'ImageContentSourcePolicy',
    'ImageDigestMirrorSet',
    'ImageTagMirrorSet',
)

# Record lists are validated for shape only; empty strings are rejected
# later with the same errors as any other input.
_string_list = {
    'type': 'array',
    'items': {'type': 'string'},
}

_mirror_record = {
    'type': 'object',
    'properties': {
        'source': {'type': 'string'},
        'mirrors': _string_list,
    },
    'required': ['source'],
}

_mirror_record_with_policy = copy.deepcopy(_mirror_record)
_mirror_record_with_policy['properties']['mirrorSourcePolicy'] = {
    'type': 'string',
    'enum': [policy.value for policy in base.SourcePolicy],
}


def _resource(kind, records_key, record):
    return {
        'type': 'object',
        'properties': {
            'kind': {'type': 'string', 'enum': [kind]},
            'metadata': {
                'type': 'object',
                'properties': {'name': {'type': 'string'}},
            },
            'spec': {
                'type': 'object',
                'properties': {
                    records_key: {'type': 'array', 'items': record},
                },
            },
        },
        'required': ['kind'],
    }


RECORDS_KEYS = {
    KIND_ICSP: 'repositoryDigestMirrors',
    KIND_IDMS: 'imageDigestMirrors',
    KIND_ITMS: 'imageTagMirrors',
}

image_content_source_policy = _resource(
    KIND_ICSP, RECORDS_KEYS[KIND_ICSP], _mirror_record)

image_digest_mirror_set = _resource(
    KIND_IDMS, RECORDS_KEYS[KIND_IDMS], _mirror_record_with_policy)

image_tag_mirror_set = _resource(
    KIND_ITMS, RECORDS_KEYS[KIND_ITMS], _mirror_record_with_policy)

image = {
    'type': 'object',
    'properties': {
        'kind': {'type': 'string', 'enum': [KIND_IMAGE]},
        'spec': {
            'type': 'object',
            'properties': {
                'registrySources': {
                    'type': 'object',
                    'properties': {
                        'insecureRegistries': _string_list,
                        'blockedRegistries': _string_list,
                        'allowedRegistries': _string_list,
                    },
                },
            },
        },
    },
    'required': ['kind'],
}

SCHEMAS = {
    KIND_IMAGE: image,
    KIND_ICSP: image_content_source_policy,
    KIND_IDMS: image_digest_mirror_set,
    KIND_ITMS: image_tag_mirror_set,
}

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

"""Helpers for image references and registry scope entries.

Registry scope entries are either exact registry or repository names
(``quay.io``, ``quay.io/openshift``) or wildcard registry names of the form
``*.example.com``. An exact entry covers itself and every repository below
it; a wildcard entry covers every registry host ending in its suffix.
"""

WILDCARD = '*.'


def is_wildcard(entry):
    """Whether a scope entry is a ``*.suffix`` wildcard."""
    return entry.startswith(WILDCARD)


def registry_host(reference):
    """Return the registry part of a reference.

    A wildcard entry is its own host.
    """
    return reference.split('/', 1)[0]


def is_digest_reference(image_ref):
    """Whether an image reference pins its image by digest."""
    return '@' in image_ref


def repository(image_ref):
    """Strip the digest and tag from an image reference.

    :param image_ref: An image reference such as
        ``quay.io/ns/image@sha256:...``, ``quay.io/ns/image:4.12`` or
        ``quay.io/ns/image:4.12@sha256:...``.
    :returns: The repository, ``quay.io/ns/image`` in all three examples.
    """
    image_ref = image_ref.split('@', 1)[0]
    colon = image_ref.rfind(':')
    # A colon before the last path separator belongs to a registry port.
    if colon > image_ref.rfind('/'):
        return image_ref[:colon]
    return image_ref


def scope_matches(candidate, entry):
    """Check whether ``candidate`` falls under the scope ``entry``.

    :param candidate: A registry, repository or wildcard entry.
    :param entry: A scope entry, exact or wildcard.
    :returns: True if ``entry`` covers ``candidate``.
    """
    if is_wildcard(entry):
        return registry_host(candidate).endswith(entry[1:])
    return candidate == entry or candidate.startswith(entry + '/')


def matches(candidate, entries):
    """Check whether any of ``entries`` covers ``candidate``."""
    return any(scope_matches(candidate, entry) for entry in entries or ())


def matching_entries(candidate, entries):
    """Return the entries covering ``candidate``, in input order."""
    return [entry for entry in entries or ()
            if scope_matches(candidate, entry)]

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

"""
Compile registries.conf and policy.json from registry configuration.
"""

import sys

from oslo_log import log

from regpolicy.common import config
from regpolicy.common import exception
from regpolicy.compiler import engine
from regpolicy.compiler import loader
from regpolicy.conf import CONF


LOG = log.getLogger(__name__)


def _read_template(path):
    if not path:
        return None
    with open(path, 'rb') as f:
        return f.read()


def _write(path, contents):
    if path == '-':
        sys.stdout.write(contents.decode('utf-8'))
        return
    with open(path, 'wb') as f:
        f.write(contents)
    LOG.info("Wrote %s", path)


def _merge(*lists):
    merged = []
    for entries in lists:
        merged.extend(entry for entry in entries if entry not in merged)
    return merged


def build_snapshot():
    """Assemble a configuration snapshot from options and manifests.

    :raises: ConflictingRegistrySources if the merged blocked and allowed
        registry lists are both non-empty.
    """
    documents = loader.load_manifests(CONF.images.mirror_rules)
    insecure, blocked, allowed = loader.registry_sources_from_manifests(
        documents)
    icsp_rules, idms_rules, itms_rules = loader.rule_sets_from_manifests(
        documents)
    blocked = _merge(CONF.images.blocked_registries, blocked)
    allowed = _merge(CONF.images.allowed_registries, allowed)
    if blocked and allowed:
        raise exception.ConflictingRegistrySources(
            blocked=', '.join(blocked), allowed=', '.join(allowed))
    return engine.ConfigurationSnapshot(
        CONF.compiler.release_image,
        insecure=_merge(CONF.images.insecure_registries, insecure),
        blocked=blocked, allowed=allowed,
        icsp_rules=icsp_rules, idms_rules=idms_rules, itms_rules=itms_rules)


def compile_and_write():
    snapshot = build_snapshot()
    compiled = engine.compile_configuration(
        snapshot,
        registries_template=_read_template(
            CONF.compiler.registries_template),
        policy_template=_read_template(CONF.compiler.policy_template))
    _write(CONF.compiler.registries_output, compiled.registries)
    _write(CONF.compiler.policy_output, compiled.policy)


def main():
    log.register_options(CONF)
    config.parse_args(sys.argv)
    log.setup(CONF, 'regpolicy')

    try:
        compile_and_write()
    except (exception.RegpolicyException, OSError) as e:
        LOG.error("Registry configuration generation failed: %s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())

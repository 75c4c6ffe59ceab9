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

from oslo_config import cfg

from regpolicy.common.i18n import _


group = cfg.OptGroup(name='compiler',
                     title='Registry Configuration Compiler Options')
opts = [
    cfg.StrOpt('registries_template',
               help=_('Path to the base registries.conf (TOML) document '
                      'compiled registry entries are merged into. When '
                      'unset, a built-in template searching '
                      'registry.access.redhat.com and docker.io for '
                      'unqualified image names is used.')),
    cfg.StrOpt('policy_template',
               help=_('Path to the base signature policy.json document '
                      'compiled trust scopes are merged into. When unset, '
                      'a built-in template accepting any image by default '
                      'is used.')),
    cfg.StrOpt('registries_output',
               default='-',
               help=_('Where to write the compiled registries.conf. "-" '
                      'writes to standard output.')),
    cfg.StrOpt('policy_output',
               default='-',
               help=_('Where to write the compiled policy.json. "-" writes '
                      'to standard output.')),
    cfg.StrOpt('release_image',
               help=_('Image reference of the cluster release payload. The '
                      'compiled configuration is rejected if it would make '
                      'this image unpullable.')),
]


def register_opts(conf):
    conf.register_group(group)
    conf.register_opts(opts, group=group)

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


group = cfg.OptGroup(name='images',
                     title='Image Registry Source Options')
opts = [
    cfg.ListOpt('insecure_registries',
                default=[],
                help=_('Registries or repositories which may be contacted '
                       'without TLS verification. Entries may be wildcards '
                       'of the form "*.example.com". Merged with the '
                       'insecure registries of an Image manifest.')),
    cfg.ListOpt('blocked_registries',
                default=[],
                help=_('Registries or repositories image pulls are refused '
                       'from. Merged with the blocked registries of an '
                       'Image manifest.')),
    cfg.ListOpt('allowed_registries',
                default=[],
                help=_('Registries or repositories image pulls are '
                       'restricted to. When set, every other source is '
                       'rejected. Merged with the allowed registries of an '
                       'Image manifest.')),
    cfg.MultiStrOpt('mirror_rules',
                    default=[],
                    help=_('Path to a YAML file holding Image, '
                           'ImageContentSourcePolicy, ImageDigestMirrorSet '
                           'or ImageTagMirrorSet manifests. May be given '
                           'more than once.')),
]


def register_opts(conf):
    conf.register_group(group)
    conf.register_opts(opts, group=group)

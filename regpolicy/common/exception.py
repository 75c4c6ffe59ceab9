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

"""Regpolicy specific exceptions list."""
import collections
import json

from oslo_log import log as logging
from oslo_utils import excutils

from regpolicy.common.i18n import _
from regpolicy.conf import CONF

LOG = logging.getLogger(__name__)


def _ensure_exception_kwargs_serializable(exc_class_name, kwargs):
    """Ensure that kwargs are serializable

    Ensure that all kwargs passed to exception constructor can be reported
    to the caller, by trying to convert them to JSON, or, as a last resort,
    to string. If it is not possible, unserializable kwargs will be removed,
    letting the receiver handle the exception string as it is configured to.

    :param exc_class_name: a RegpolicyException class name.
    :param kwargs: a dictionary of keyword arguments passed to the exception
        constructor.
    :returns: a dictionary of serializable keyword arguments.
    """
    serializers = [(json.dumps, _('when converting to JSON')),
                   (str, _('when converting to string'))]
    exceptions = collections.defaultdict(list)
    serializable_kwargs = {}
    for k, v in kwargs.items():
        for serializer, msg in serializers:
            try:
                serializable_kwargs[k] = serializer(v)
                exceptions.pop(k, None)
                break
            except Exception as e:
                exceptions[k].append(
                    '(%(serializer_type)s) %(e_type)s: %(e_contents)s' %
                    {'serializer_type': msg, 'e_contents': e,
                     'e_type': e.__class__.__name__})
    if exceptions:
        LOG.error("One or more arguments passed to the %(exc_class)s "
                  "constructor as kwargs can not be serialized. The "
                  "serialized arguments: %(serialized)s. These "
                  "unserialized kwargs were dropped because of the "
                  "exceptions encountered during their "
                  "serialization:\n%(errors)s",
                  dict(errors=';\n'.join("%s: %s" % (k, '; '.join(v))
                                         for k, v in exceptions.items()),
                       exc_class=exc_class_name,
                       serialized=serializable_kwargs))
        # We might be able to actually put the following keys' values into
        # format string, but there is no guarantee, drop it just in case.
        for k in exceptions:
            del kwargs[k]
    return serializable_kwargs


class RegpolicyException(Exception):
    """Base Regpolicy Exception

    To correctly use this class, inherit from it and define
    a '_msg_fmt' property. That _msg_fmt will get printf'd
    with the keyword arguments provided to the constructor.

    If you need to access the message from an exception you should use
    str(exc)

    """

    _msg_fmt = _("An unknown exception occurred.")

    def __init__(self, message=None, **kwargs):
        self.kwargs = _ensure_exception_kwargs_serializable(
            self.__class__.__name__, kwargs)

        if not message:
            try:
                message = self._msg_fmt % kwargs

            except Exception:
                with excutils.save_and_reraise_exception() as ctxt:
                    # kwargs doesn't match a variable in the message
                    # log the issue and the kwargs
                    prs = ', '.join('%s=%s' % pair for pair in kwargs.items())
                    LOG.exception('Exception in string format operation '
                                  '(arguments %s)', prs)
                    if not CONF.errors.fatal_exception_format_errors:
                        # at least get the core message out if something
                        # happened
                        message = self._msg_fmt
                        ctxt.reraise = False

        super(RegpolicyException, self).__init__(message)


class Invalid(RegpolicyException):
    _msg_fmt = _("Unacceptable parameters.")


class InvalidRegistryScope(Invalid):
    _msg_fmt = _('invalid entry for %(category)s registries "%(entry)s"')


class EmptyMirrorEntry(InvalidRegistryScope):
    _msg_fmt = _("invalid empty entry for %(field)s configuration")


class WildcardSourceMirrored(InvalidRegistryScope):
    _msg_fmt = _('wildcard source "%(source)s" cannot be mirrored; mirrors '
                 'only apply to exact repositories or registries')


class MirrorSourcePolicyConflict(Invalid):
    _msg_fmt = _('conflicting mirrorSourcePolicy is set for the same source '
                 '"%(source)s" in imagedigestmirrorsets and '
                 'imagetagmirrorsets')


class SourceMirrorsItself(MirrorSourcePolicyConflict):
    _msg_fmt = _('cannot set mirrorSourcePolicy: NeverContactSource if the '
                 'source "%(source)s" is one of the mirrors')


class InvalidResource(Invalid):
    _msg_fmt = _("Invalid %(kind)s resource %(name)s: %(reason)s")


class ConflictingRegistrySources(Invalid):
    _msg_fmt = _("only one of allowed registries or blocked registries may "
                 "be set; blocked: %(blocked)s, allowed: %(allowed)s")


class UnpullablePayload(RegpolicyException):
    """The compiled configuration would make the release payload unpullable.

    ``registries_blocked`` and ``policy_blocked`` hold the blocked lists with
    the entries blocking the payload removed, for callers that want to report
    what a payload-safe configuration would look like.
    """

    _msg_fmt = _("release payload %(image)s would be unpullable: "
                 "%(reason)s")

    def __init__(self, message=None, registries_blocked=None,
                 policy_blocked=None, **kwargs):
        self.registries_blocked = list(registries_blocked or [])
        self.policy_blocked = list(policy_blocked or [])
        super(UnpullablePayload, self).__init__(message, **kwargs)


class TemplateError(RegpolicyException):
    _msg_fmt = _("Invalid template document: %(reason)s")


class RegistriesConfigError(TemplateError):
    _msg_fmt = _("Unable to compile registries configuration: %(reason)s")


class PolicyConfigError(TemplateError):
    _msg_fmt = _("Unable to compile signature policy: %(reason)s")

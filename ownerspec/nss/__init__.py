# Copyright 2013 Isotoma Limited
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import importlib
from importlib.metadata import entry_points
from urllib.parse import urlparse

from ownerspec import error
from .base import NameService, struct_group, struct_passwd


# scheme -> "module:class"; the ssh backend pulls in paramiko so everything
# is imported on first use
nameservices = {
    "local": "ownerspec.nss.local:LocalNameService",
    "files": "ownerspec.nss.files:FilesNameService",
    "ssh": "ownerspec.nss.ssh:SSHNameService",
}

for ep in entry_points(group="ownerspec.nameservices"):
    nameservices[ep.name] = ep.value


def get_nameservice_class(scheme):
    try:
        target = nameservices[scheme]
    except KeyError:
        raise error.InvalidNameService(
            "No name service backend for scheme '%s'. Choose from: %s" % (
                scheme, ", ".join(sorted(nameservices))))

    if not isinstance(target, str):
        return target

    modname, clsname = target.split(":", 1)
    try:
        module = importlib.import_module(modname)
    except ImportError as e:
        raise error.MissingDependency(
            "The '%s' name service could not be loaded: %s" % (scheme, e))
    return getattr(module, clsname)


def open_nameservice(uri="", **options):
    """ Build the name service that ``uri`` describes, for example
    ``local://``, ``files:///srv/chroot`` or ``ssh://deploy@example.com``.

    An empty ``uri`` is the local machine. Extra keyword options are passed
    to the backend (``private_key`` for ssh). The caller owns the result
    and should ``close()`` it, or use it as a context manager. """
    parsed = urlparse(uri or "local://")
    NameServiceClass = get_nameservice_class(parsed.scheme)
    return NameServiceClass.from_uri(parsed, **options)


__all__ = [
    "NameService",
    "struct_group",
    "struct_passwd",
    "nameservices",
    "get_nameservice_class",
    "open_nameservice",
]

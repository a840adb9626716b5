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

try:
    import pwd
except ImportError:
    pwd = None
try:
    import grp
except ImportError:
    grp = None

from ownerspec import error
from . import base


class LocalNameService(base.NameService):

    """ The name service of the machine we are running on, through whatever
    the C library's NSS configuration points at. """

    def connect(self):
        if pwd is None or grp is None:
            raise error.MissingDependency(
                "The local name service needs the pwd and grp modules, which this platform does not have")
        return self

    def getpwnam(self, name):
        try:
            return pwd.getpwnam(name)
        except ValueError:
            # embedded NUL bytes can never name a user
            raise KeyError(name)

    def getgrnam(self, name):
        try:
            return grp.getgrnam(name)
        except ValueError:
            raise KeyError(name)

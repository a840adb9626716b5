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

import mock

from ownerspec.nss.base import NameService, struct_passwd, struct_group
from ownerspec.nss.remote import RemoteNameService
from ownerspec.spec import resolve_spec, OwnershipSpec
from ownerspec import error
from ownerspec.tests.base import TestCase


class FakeRemoteNameService(RemoteNameService, NameService):
    pass


class TestRemoteNameService(TestCase):

    def setUp(self):
        self.nameservice = FakeRemoteNameService()
        self.ex = self.nameservice._execute = mock.Mock()

    def test_getpwnam(self):
        self.ex.return_value = [0, "mysql:x:105:110:MySQL Server,,,:/nonexistent:/bin/false\n", ""]
        user = self.nameservice.getpwnam("mysql")
        self.assertEqual(user, struct_passwd(
            "mysql", "x", 105, 110, "MySQL Server,,,", "/nonexistent", "/bin/false"))
        self.ex.assert_called_with(["getent", "passwd", "--", "mysql"])

    def test_getpwnam_miss(self):
        self.ex.return_value = [2, "", ""]
        self.assertRaises(KeyError, self.nameservice.getpwnam, "sqlite")

    def test_getpwnam_numeric_key(self):
        # getent answers "1000" with the user whose uid is 1000
        self.ex.return_value = [0, "foo:x:1000:1000::/home/foo:/bin/sh\n", ""]
        self.assertRaises(KeyError, self.nameservice.getpwnam, "1000")

    def test_getpwnam_garbage(self):
        self.ex.return_value = [0, "not a passwd line\n", ""]
        self.assertRaises(KeyError, self.nameservice.getpwnam, "mysql")

    def test_getpwnam_negative_uid(self):
        self.ex.return_value = [0, "nobody:x:-2:-2::/:/bin/false\n", ""]
        self.assertRaises(KeyError, self.nameservice.getpwnam, "nobody")

    def test_getgrnam(self):
        self.ex.return_value = [0, "adm:x:4:syslog,foo\n", ""]
        group = self.nameservice.getgrnam("adm")
        self.assertEqual(group, struct_group("adm", "x", 4, ["syslog", "foo"]))
        self.ex.assert_called_with(["getent", "group", "--", "adm"])

    def test_getgrnam_miss(self):
        self.ex.return_value = [2, "", ""]
        self.assertRaises(KeyError, self.nameservice.getgrnam, "sqlite")

    def test_getgrnam_numeric_key(self):
        self.ex.return_value = [0, "adm:x:4:\n", ""]
        self.assertRaises(KeyError, self.nameservice.getgrnam, "4")

    def test_resolve_spec_numeric(self):
        self.ex.side_effect = [
            [0, "foo:x:1000:1000::/home/foo:/bin/sh\n", ""],
            [0, "adm:x:4:\n", ""],
            ]
        spec = resolve_spec(self.nameservice, "1000:4")
        self.assertEqual(spec, OwnershipSpec("1000:4", 1000, 4))

    def test_resolve_spec_numeric_login_group(self):
        self.ex.return_value = [0, "foo:x:1000:1000::/home/foo:/bin/sh\n", ""]
        self.assertRaises(error.InvalidSpec, resolve_spec, self.nameservice, "1000:")

    def test_resolve_spec_login_group(self):
        self.ex.return_value = [0, "mysql:x:105:110::/nonexistent:/bin/false\n", ""]
        spec = resolve_spec(self.nameservice, "mysql:")
        self.assertEqual(spec, OwnershipSpec("mysql:", 105, 110))

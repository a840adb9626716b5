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

from ownerspec import error
from ownerspec.nss.base import struct_passwd, struct_group
from ownerspec.nss.local import LocalNameService
from ownerspec.spec import resolve_spec, OwnershipSpec
from ownerspec.tests.base import TestCase


class TestLocalNameService(TestCase):

    def setUp(self):
        for modname in ("pwd", "grp"):
            patcher = mock.patch(
                "ownerspec.nss.local.%s" % modname)
            self.addCleanup(patcher.stop)
            setattr(self, modname, patcher.start())

        self.nameservice = LocalNameService()

    def test_getpwnam(self):
        self.pwd.getpwnam.return_value = "mysql"
        user = self.nameservice.getpwnam("mysql")
        self.assertEqual(user, "mysql")
        self.pwd.getpwnam.assert_called_with("mysql")

    def test_getpwnam_miss(self):
        self.pwd.getpwnam.side_effect = KeyError
        self.assertRaises(KeyError, self.nameservice.getpwnam, "sqlite")

    def test_getpwnam_nul(self):
        self.pwd.getpwnam.side_effect = ValueError
        self.assertRaises(KeyError, self.nameservice.getpwnam, "a\0b")

    def test_getgrnam(self):
        self.grp.getgrnam.return_value = "mysql"
        group = self.nameservice.getgrnam("mysql")
        self.assertEqual(group, "mysql")
        self.grp.getgrnam.assert_called_with("mysql")

    def test_getgrnam_miss(self):
        self.grp.getgrnam.side_effect = KeyError
        self.assertRaises(KeyError, self.nameservice.getgrnam, "sqlite")

    def test_getgrnam_nul(self):
        self.grp.getgrnam.side_effect = ValueError
        self.assertRaises(KeyError, self.nameservice.getgrnam, "a\0b")

    def test_lookup_miss(self):
        self.pwd.getpwnam.side_effect = KeyError
        self.grp.getgrnam.side_effect = KeyError
        self.assertEqual(self.nameservice.lookup_user_by_name("sqlite"), None)
        self.assertEqual(self.nameservice.lookup_group_by_name("sqlite"), None)

    def test_connect(self):
        self.assertIs(self.nameservice.connect(), self.nameservice)

    def test_resolve_spec(self):
        self.pwd.getpwnam.return_value = struct_passwd(
            "mysql", "x", 105, 110, "", "/nonexistent", "/bin/false")
        self.grp.getgrnam.return_value = struct_group("adm", "x", 4, [])
        spec = resolve_spec(self.nameservice, "mysql:adm")
        self.assertEqual(spec, OwnershipSpec("mysql:adm", 105, 4))


class TestLocalNameServiceUnavailable(TestCase):

    def test_connect_without_pwd(self):
        with mock.patch("ownerspec.nss.local.pwd", None):
            self.assertRaises(error.MissingDependency, LocalNameService().connect)

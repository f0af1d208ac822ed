"""
Unit tests for user record loading.
"""

import json
import os
import shutil
import sys
import tempfile
import unittest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from conftest import TEST_USER
from users import (
    USER_FIELDS,
    UserNotFoundError,
    clear_user_cache,
    list_users,
    load_user,
    user_from_fields,
)


class TestLoadUser(unittest.TestCase):
    """Tests for load_user."""

    def setUp(self):
        clear_user_cache()
        self.users_dir = tempfile.mkdtemp()
        self._write("dvir", TEST_USER)

    def tearDown(self):
        shutil.rmtree(self.users_dir)
        clear_user_cache()

    def _write(self, name, data):
        with open(os.path.join(self.users_dir, f"{name}.json"), "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)

    def test_loads_record(self):
        self.assertEqual(load_user("dvir", self.users_dir), TEST_USER)

    def test_numbers_become_strings(self):
        self._write("numeric", {"firstName": "א", "lastName": "ב", "privateNumber": 7600783, "idNumber": 308334127})
        user = load_user("numeric", self.users_dir)
        self.assertEqual(user["privateNumber"], "7600783")
        self.assertEqual(user["idNumber"], "308334127")

    def test_missing_keys_are_empty(self):
        self._write("partial", {"firstName": "דביר"})
        user = load_user("partial", self.users_dir)
        self.assertEqual(set(user), set(USER_FIELDS))
        self.assertEqual(user["lastName"], "")

    def test_unknown_user(self):
        with self.assertRaises(UserNotFoundError) as ctx:
            load_user("nobody", self.users_dir)
        self.assertIn("nobody", str(ctx.exception))

    def test_invalid_names_rejected(self):
        for name in ["../dvir", ".hidden", "a/b", ""]:
            with self.assertRaises(UserNotFoundError, msg=name):
                load_user(name, self.users_dir)

    def test_returned_dict_is_a_copy(self):
        user = load_user("dvir", self.users_dir)
        user["firstName"] = "changed"
        self.assertEqual(load_user("dvir", self.users_dir)["firstName"], TEST_USER["firstName"])

    def test_bundled_example_user(self):
        user = load_user("example")
        self.assertEqual(set(user), set(USER_FIELDS))
        self.assertTrue(user["idNumber"])


class TestListUsers(unittest.TestCase):

    def test_lists_json_files_sorted(self):
        users_dir = tempfile.mkdtemp()
        try:
            for name in ["zeev.json", "avi.json", "notes.txt"]:
                open(os.path.join(users_dir, name), "w").close()
            self.assertEqual(list_users(users_dir), ["avi", "zeev"])
        finally:
            shutil.rmtree(users_dir)

    def test_missing_directory(self):
        self.assertEqual(list_users("/nonexistent/users"), [])


class TestUserFromFields(unittest.TestCase):

    def test_all_fields(self):
        self.assertEqual(user_from_fields(TEST_USER), TEST_USER)

    def test_missing_and_none_become_empty(self):
        user = user_from_fields({"firstName": "דביר", "idNumber": None})
        self.assertEqual(user["idNumber"], "")
        self.assertEqual(user["lastName"], "")

    def test_extra_keys_dropped(self):
        user = user_from_fields(dict(TEST_USER, role="admin"))
        self.assertNotIn("role", user)


if __name__ == "__main__":
    unittest.main()

import json
import tempfile
import unittest
from pathlib import Path

from bucket_index.profiles import ConnectionProfile, ProfileStorage


class FakeKeychain:
    def __init__(self):
        self.secrets = {}
        self.set_calls = []

    def get_secret(self, profile_name: str) -> str:
        return self.secrets.get(profile_name, "")

    def set_secret(self, profile_name: str, secret_key: str) -> None:
        self.set_calls.append((profile_name, secret_key))
        self.secrets[profile_name] = secret_key


class ProfileStorageTests(unittest.TestCase):
    def test_load_reads_secret_from_keychain(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "connections.json"
            payload = [{"name": "alpha", "endpoint_url": "https://one", "access_key": "a"}]
            path.write_text(json.dumps(payload), encoding="utf-8")
            keychain = FakeKeychain()
            keychain.secrets["alpha"] = "stored"

            profiles = ProfileStorage(path, keychain=keychain).load()

            self.assertEqual(
                [ConnectionProfile(name="alpha", endpoint_url="https://one", access_key="a", secret_key="stored")],
                profiles,
            )
            self.assertEqual([], keychain.set_calls)

    def test_load_migrates_plaintext_secrets(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "connections.json"
            payload = [
                {
                    "name": "alpha",
                    "endpoint_url": "https://one",
                    "access_key": "a",
                    "secret_key": "secret",
                }
            ]
            path.write_text(json.dumps(payload), encoding="utf-8")
            keychain = FakeKeychain()

            profiles = ProfileStorage(path, keychain=keychain).load()

            self.assertEqual("secret", profiles[0].secret_key)
            self.assertEqual([("alpha", "secret")], keychain.set_calls)
            sanitized = json.loads(path.read_text(encoding="utf-8"))
            self.assertNotIn("secret_key", sanitized[0])

    def test_load_skips_incomplete_entries(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "connections.json"
            payload = [{"name": "broken"}, {"name": "ok", "access_key": "a"}]
            path.write_text(json.dumps(payload), encoding="utf-8")

            profiles = ProfileStorage(path, keychain=FakeKeychain()).load()

            self.assertEqual(["ok"], [profile.name for profile in profiles])
            self.assertEqual("", profiles[0].endpoint_url)

    def test_get_unknown_profile_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            storage = ProfileStorage(Path(tmp) / "missing.json", keychain=FakeKeychain())

            with self.assertRaises(ValueError):
                storage.get("alpha")


if __name__ == "__main__":
    unittest.main()

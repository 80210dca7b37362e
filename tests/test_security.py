"""PasswordHasher unit tests."""
from blog.security import PasswordHasher

# Cheap parameters; correctness does not depend on cost.
hasher = PasswordHasher(time_cost=1, memory_cost=8192, parallelism=1)


def test_hash_is_not_plaintext():
    digest = hasher.hash("hunter22")
    assert digest != "hunter22"
    assert "hunter22" not in digest
    assert digest.startswith("$argon2id$")


def test_hash_is_salted():
    assert hasher.hash("hunter22") != hasher.hash("hunter22")


def test_matches_only_original_plaintext():
    digest = hasher.hash("hunter22")
    assert hasher.matches("hunter22", digest)
    assert not hasher.matches("hunter23", digest)
    assert not hasher.matches("", digest)


def test_matches_rejects_malformed_digest():
    assert not hasher.matches("hunter22", "not-a-digest")
    assert not hasher.matches("hunter22", "")
    assert not hasher.matches("hunter22", None)


def test_cost_factor_is_encoded_in_digest():
    digest = PasswordHasher(time_cost=2, memory_cost=8192, parallelism=1).hash("pw")
    assert "m=8192,t=2,p=1" in digest

"""Unit tests for principal_service — profile mapping, validation, redaction, hashing."""

import unittest
from dataclasses import asdict, fields
from datetime import datetime, timezone
from unittest.mock import patch

from domain.model.errors import HashingError, ValidationError
from domain.model.user import Provider, ProviderEmail, ProviderProfile, SafeUser, User
from services.principal_service import (
    from_provider_profile,
    hash_password,
    to_safe_view,
    validate,
    verify_password,
    with_password,
)


def _profile(**overrides) -> ProviderProfile:
    defaults = dict(
        id='g1',
        emails=[ProviderEmail(value='a@x.com')],
        given_name='A',
        family_name='B',
        display_name='A B',
        photos=[],
    )
    defaults.update(overrides)
    return ProviderProfile(**defaults)


def _user(**overrides) -> User:
    now = datetime.now(timezone.utc)
    defaults = dict(
        email='jane@example.com',
        first_name='Jane',
        last_name='Doe',
        created_at=now,
        updated_at=now,
        provider=Provider.GOOGLE,
        google_id='google-123',
    )
    defaults.update(overrides)
    return User(**defaults)


class TestFromProviderProfile(unittest.TestCase):
    """Test from_provider_profile()."""

    def test_maps_profile_fields(self):
        profile = _profile(photos=['https://img.example/p.png', 'https://img.example/q.png'])

        user = from_provider_profile(profile)

        self.assertIsNone(user.id)
        self.assertEqual(user.email, 'a@x.com')
        self.assertEqual(user.first_name, 'A')
        self.assertEqual(user.last_name, 'B')
        self.assertEqual(user.display_name, 'A B')
        self.assertEqual(user.profile_picture, 'https://img.example/p.png')
        self.assertEqual(user.provider, Provider.GOOGLE)
        self.assertEqual(user.google_id, 'g1')
        self.assertTrue(user.is_active)
        self.assertIsNone(user.password_hash)

    def test_timestamps_are_set_to_now(self):
        before = datetime.now(timezone.utc)
        user = from_provider_profile(_profile())

        self.assertGreaterEqual(user.created_at, before)
        self.assertEqual(user.created_at, user.updated_at)
        self.assertEqual(user.last_login, user.created_at)

    def test_prefers_first_verified_email(self):
        profile = _profile(emails=[
            ProviderEmail(value='old@x.com', verified=False),
            ProviderEmail(value='main@x.com', verified=True),
        ])

        self.assertEqual(from_provider_profile(profile).email, 'main@x.com')

    def test_no_photo_means_no_picture(self):
        self.assertIsNone(from_provider_profile(_profile(photos=[])).profile_picture)

    def test_missing_email_raises_validation_error(self):
        with self.assertRaises(ValidationError):
            from_provider_profile(_profile(emails=[]))

    def test_valid_profiles_pass_validation(self):
        """Any profile with a primary email and names yields no violations."""
        profiles = [
            _profile(),
            _profile(id='g2', emails=[ProviderEmail('x.y@sub.example.org', True)]),
            _profile(id='g3', given_name='Émilie', family_name='Du Châtelet', display_name=None),
            _profile(id='g4', given_name='N' * 50, family_name='M' * 50, display_name='D' * 100),
        ]
        for profile in profiles:
            with self.subTest(profile=profile.id):
                result = validate(from_provider_profile(profile))
                self.assertTrue(result.is_valid, result.errors)


class TestValidate(unittest.TestCase):
    """Test validate()."""

    def test_valid_google_user(self):
        result = validate(_user())
        self.assertTrue(result.is_valid)
        self.assertEqual(result.errors, [])

    def test_local_short_password_cites_minimum_length(self):
        user = _user(provider=Provider.LOCAL, google_id=None)

        result = validate(user, password='abc')

        self.assertFalse(result.is_valid)
        self.assertIn('Password must be at least 6 characters long', result.errors)

    def test_local_password_of_six_characters_is_accepted(self):
        user = _user(provider=Provider.LOCAL, google_id=None)
        self.assertTrue(validate(user, password='abcdef').is_valid)

    def test_local_password_over_bcrypt_limit_is_rejected(self):
        user = _user(provider=Provider.LOCAL, google_id=None)

        result = validate(user, password='p' * 80)

        self.assertFalse(result.is_valid)
        self.assertIn('Password must be at most 72 bytes', result.errors)

    def test_password_limit_counts_utf8_bytes(self):
        user = _user(provider=Provider.LOCAL, google_id=None)
        # 36 two-byte characters fit, 37 do not
        self.assertTrue(validate(user, password='\u00e9' * 36).is_valid)
        self.assertFalse(validate(user, password='\u00e9' * 37).is_valid)

    def test_stored_local_user_with_hash_satisfies_password_rule(self):
        user = _user(provider=Provider.LOCAL, google_id=None, password_hash='$2b$12$x', from_store=True)
        self.assertTrue(validate(user).is_valid)

    def test_google_user_without_external_id(self):
        result = validate(_user(google_id=None))

        self.assertFalse(result.is_valid)
        self.assertIn('Google ID is required for Google authentication', result.errors)

    def test_reports_all_violations(self):
        user = _user(email='', first_name='', last_name='', google_id=None)

        result = validate(user)

        self.assertEqual(result.errors, [
            'Email is required',
            'First name is required',
            'Last name is required',
            'Google ID is required for Google authentication',
        ])

    def test_invalid_email_format(self):
        for email in ['plain', 'no@tld', 'sp ace@x.com', '@x.com']:
            with self.subTest(email=email):
                self.assertIn('Invalid email format', validate(_user(email=email)).errors)

    def test_length_limits(self):
        user = _user(first_name='F' * 51, last_name='L' * 51, display_name='D' * 101)

        errors = validate(user).errors

        self.assertEqual(len(errors), 3)
        self.assertTrue(any('First name' in e for e in errors))
        self.assertTrue(any('Last name' in e for e in errors))
        self.assertTrue(any('Display name' in e for e in errors))

    def test_whitespace_names_are_missing(self):
        errors = validate(_user(first_name='  ', last_name='\t')).errors
        self.assertIn('First name is required', errors)
        self.assertIn('Last name is required', errors)


class TestToSafeView(unittest.TestCase):
    """Test to_safe_view()."""

    def test_excludes_secrets(self):
        user = _user(
            id='u1',
            provider=Provider.LOCAL,
            google_id=None,
            password_hash='$2b$12$abcdefghijklmnopqrstuv',
            from_store=True,
        )

        view = to_safe_view(user)

        self.assertIsInstance(view, SafeUser)
        field_names = {f.name for f in fields(SafeUser)}
        self.assertNotIn('password_hash', field_names)
        self.assertNotIn('google_id', field_names)
        self.assertNotIn('$2b$12$abcdefghijklmnopqrstuv', asdict(view).values())

    def test_google_id_never_exposed(self):
        view = to_safe_view(_user(id='u2', google_id='secret-google-id'))
        self.assertNotIn('secret-google-id', asdict(view).values())

    def test_copies_public_fields(self):
        login = datetime(2026, 1, 2, tzinfo=timezone.utc)
        user = _user(id='u3', display_name='Jane D', profile_picture='https://p', last_login=login, is_active=False)

        view = to_safe_view(user)

        self.assertEqual(view.id, 'u3')
        self.assertEqual(view.email, 'jane@example.com')
        self.assertEqual(view.display_name, 'Jane D')
        self.assertEqual(view.profile_picture, 'https://p')
        self.assertEqual(view.provider, Provider.GOOGLE)
        self.assertFalse(view.is_active)
        self.assertEqual(view.last_login, login)


class TestPasswordHashing(unittest.TestCase):
    """Test hash_password() / verify_password()."""

    @classmethod
    def setUpClass(cls):
        cls.hashed = hash_password('correct horse')

    def test_hash_is_not_plaintext(self):
        self.assertNotEqual(self.hashed, 'correct horse')
        self.assertTrue(self.hashed.startswith('$2'))

    def test_hash_uses_twelve_rounds(self):
        self.assertEqual(self.hashed.split('$')[2], '12')

    def test_verify_matching_password(self):
        self.assertTrue(verify_password('correct horse', self.hashed))

    def test_verify_wrong_password_returns_false(self):
        for candidate in ['wrong', '', 'correct horse ', 'Correct horse', 'x' * 100]:
            with self.subTest(candidate=candidate):
                self.assertFalse(verify_password(candidate, self.hashed))

    def test_malformed_hash_raises_hashing_error(self):
        with self.assertRaises(HashingError):
            verify_password('anything', 'not-a-bcrypt-hash')

    def test_missing_hash_raises_hashing_error(self):
        for stored in [None, '']:
            with self.subTest(stored=stored):
                with self.assertRaises(HashingError):
                    verify_password('anything', stored)

    def test_overlong_password_is_a_validation_error(self):
        with self.assertRaises(ValidationError) as ctx:
            hash_password('p' * 80)
        self.assertNotIsInstance(ctx.exception, HashingError)
        self.assertIn('72 bytes', str(ctx.exception))

    @patch('services.principal_service.bcrypt.hashpw', side_effect=ValueError("boom"))
    def test_primitive_failure_raises_hashing_error(self, _mock_hashpw):
        with self.assertRaises(HashingError):
            hash_password('secret1')


class TestWithPassword(unittest.TestCase):
    """Test with_password() — hashing applied only to fresh local users."""

    def test_hashes_fresh_local_user(self):
        user = _user(provider=Provider.LOCAL, google_id=None)

        prepared = with_password(user, 'secret1')

        self.assertIsNone(user.password_hash)
        self.assertTrue(verify_password('secret1', prepared.password_hash))

    def test_store_sourced_hash_is_not_rehashed(self):
        stored_hash = hash_password('secret1')
        user = _user(provider=Provider.LOCAL, google_id=None, password_hash=stored_hash, from_store=True)

        prepared = with_password(user, 'secret1')

        self.assertEqual(prepared.password_hash, stored_hash)

    def test_google_user_never_gets_a_hash(self):
        prepared = with_password(_user(password_hash='leftover'), 'secret1')
        self.assertIsNone(prepared.password_hash)

    def test_overlong_password_for_fresh_local_user(self):
        user = _user(provider=Provider.LOCAL, google_id=None)

        with self.assertRaises(ValidationError):
            with_password(user, 'p' * 73)


if __name__ == '__main__':
    unittest.main()

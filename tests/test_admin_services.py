"""Tests for administrative mutations: users, rabbits and challenge settings."""

import unittest
from datetime import date

from pushups.core.database import create_db_engine, create_session_factory
from pushups.migrations import migrate
from pushups.services import challenge as challenge_service
from pushups.services import users as user_service
from pushups.services.errors import NotFoundError, UniquenessError, ValidationError


class _AdminTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_db_engine("sqlite://")
        migrate(self.engine, today=date(2025, 3, 1))
        self.db = create_session_factory(self.engine)()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()


class TestUsers(_AdminTestCase):
    def test_add_user_lowercases_name(self) -> None:
        user = user_service.add_user(self.db, "Mait", "mait3242")
        self.assertEqual(user.name, "mait")
        self.assertFalse(user.is_rabbit)
        self.assertEqual(user_service.find_by_secret(self.db, "mait3242").name, "mait")

    def test_duplicate_name_or_secret(self) -> None:
        user_service.add_user(self.db, "mait", "s1")
        with self.assertRaises(UniquenessError):
            user_service.add_user(self.db, "MAIT", "s2")
        with self.assertRaises(UniquenessError):
            user_service.add_user(self.db, "other", "s1")
        self.assertEqual([u.name for u in user_service.list_users(self.db)], ["mait"])

    def test_empty_name_or_secret(self) -> None:
        with self.assertRaises(ValidationError):
            user_service.add_user(self.db, "  ", "s1")
        with self.assertRaises(ValidationError):
            user_service.add_user(self.db, "mait", "")

    def test_list_users_sorted(self) -> None:
        for name in ("zed", "amy", "kim"):
            user_service.add_user(self.db, name, f"sec-{name}")
        self.assertEqual([u.name for u in user_service.list_users(self.db)], ["amy", "kim", "zed"])

    def test_remove_user(self) -> None:
        user_service.add_user(self.db, "mait", "s1")
        user_service.remove_user(self.db, "Mait")
        self.assertIsNone(user_service.find_by_name(self.db, "mait"))
        with self.assertRaises(NotFoundError):
            user_service.remove_user(self.db, "mait")

    def test_removed_user_id_not_reused(self) -> None:
        first = user_service.add_user(self.db, "a", "s1")
        user_service.remove_user(self.db, "a")
        second = user_service.add_user(self.db, "b", "s2")
        self.assertGreater(second.id, first.id)

    def test_rabbit_flag(self) -> None:
        user_service.add_user(self.db, "bunny", "s1")
        rabbit = user_service.set_rabbit(self.db, "bunny", "3000")
        self.assertTrue(rabbit.is_rabbit)
        self.assertEqual(rabbit.rabbit_target, 3000)
        plain = user_service.unset_rabbit(self.db, "bunny")
        self.assertFalse(plain.is_rabbit)
        self.assertEqual(plain.rabbit_target, 0)

    def test_rabbit_validation(self) -> None:
        user_service.add_user(self.db, "bunny", "s1")
        for target in (0, -3, "abc", "1.5"):
            with self.subTest(target=target):
                with self.assertRaises(ValidationError):
                    user_service.set_rabbit(self.db, "bunny", target)
        with self.assertRaises(NotFoundError):
            user_service.set_rabbit(self.db, "ghost", 100)
        with self.assertRaises(NotFoundError):
            user_service.unset_rabbit(self.db, "ghost")


class TestChallengeSettings(_AdminTestCase):
    def test_seeded_defaults(self) -> None:
        challenge = challenge_service.get_challenge(self.db)
        self.assertEqual((challenge.start, challenge.end), ("2025-03-01", "2025-04-01"))
        self.assertIsNone(challenge.title)
        self.assertIsNone(challenge.goal)

    def test_set_challenge(self) -> None:
        window = challenge_service.set_challenge(self.db, "2025-05-01", "2025-05-31")
        self.assertEqual(window.start, date(2025, 5, 1))
        self.assertEqual(challenge_service.get_window(self.db), window)
        self.assertTrue(window.contains(date(2025, 5, 31)))
        self.assertFalse(window.contains(date(2025, 6, 1)))

    def test_set_challenge_validation(self) -> None:
        for start, end in (
            ("2025-05-31", "2025-05-01"),
            ("2025-05-01", "2025-05-01"),
            ("2025-13-01", "2025-12-01"),
            ("May 1", "2025-06-01"),
        ):
            with self.subTest(start=start, end=end):
                with self.assertRaises(ValidationError):
                    challenge_service.set_challenge(self.db, start, end)
        self.assertEqual(challenge_service.get_challenge(self.db).start, "2025-03-01")

    def test_clear_challenge(self) -> None:
        challenge_service.clear_challenge(self.db)
        self.assertIsNone(challenge_service.get_window(self.db))
        self.assertIsNone(challenge_service.get_challenge(self.db).start)

    def test_title(self) -> None:
        challenge_service.set_title(self.db, "  March Madness ")
        self.assertEqual(challenge_service.get_challenge(self.db).title, "March Madness")
        challenge_service.set_title(self.db, None)
        self.assertIsNone(challenge_service.get_challenge(self.db).title)

    def test_goal(self) -> None:
        self.assertEqual(challenge_service.set_goal(self.db, "10000"), 10000)
        self.assertEqual(challenge_service.get_challenge(self.db).goal, 10000)
        challenge_service.clear_goal(self.db)
        self.assertIsNone(challenge_service.get_challenge(self.db).goal)

    def test_goal_must_be_positive(self) -> None:
        for goal in (0, -1, "zero", True):
            with self.subTest(goal=goal):
                with self.assertRaises(ValidationError):
                    challenge_service.set_goal(self.db, goal)

    def test_unset_differs_from_empty(self) -> None:
        self.assertIsNone(challenge_service.get_setting(self.db, "challenge_title"))
        challenge_service.set_setting(self.db, "challenge_title", "")
        self.db.commit()
        self.assertEqual(challenge_service.get_setting(self.db, "challenge_title"), "")


if __name__ == "__main__":
    unittest.main()

"""Tests for the duplicate flashcard cleanup."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from flashcards_api.core.exceptions import DatabaseError, DeduplicationError
from flashcards_api.models.flashcard import Flashcard
from flashcards_api.services.deduplication_service import (
    DeduplicationService,
    select_ids_to_delete,
)
from flashcards_api.services.flashcard_repository import FlashcardRepository


def run_dedup(repository):
    return DeduplicationService(repository).run()


def words_in_store(session, spanish_word):
    session.expire_all()
    return session.exec(
        select(Flashcard).where(Flashcard.spanish_word == spanish_word).order_by(Flashcard.id)
    ).all()


class TestSelectIdsToDelete:
    """Retention policy applied to a single group."""

    def test_empty_members_deleted_when_a_practiced_one_exists(self):
        members = [
            Flashcard(id=1, spanish_word="Hola", english_word="Hello", times_seen=0, percentage_correct=0),
            Flashcard(id=2, spanish_word="Hola", english_word="Hello", times_seen=4, percentage_correct=0.5),
            Flashcard(id=3, spanish_word="Hola", english_word="Hello", times_seen=0, percentage_correct=0),
        ]
        assert select_ids_to_delete(members) == [1, 3]

    def test_all_empty_keeps_lowest_id(self):
        members = [
            Flashcard(id=5, spanish_word="Adios", english_word="Goodbye"),
            Flashcard(id=8, spanish_word="Adios", english_word="Goodbye"),
            Flashcard(id=9, spanish_word="Adios", english_word="Goodbye"),
        ]
        assert select_ids_to_delete(members) == [8, 9]

    def test_all_practiced_deletes_nothing(self):
        members = [
            Flashcard(id=1, spanish_word="Gato", english_word="Cat", times_seen=2, percentage_correct=1.0),
            Flashcard(id=2, spanish_word="Gato", english_word="Cat", times_seen=7, percentage_correct=0.43),
        ]
        assert select_ids_to_delete(members) == []

    def test_seen_but_never_correct_counts_as_practiced(self):
        members = [
            Flashcard(id=1, spanish_word="Perro", english_word="Dog", times_seen=3, percentage_correct=0),
            Flashcard(id=2, spanish_word="Perro", english_word="Dog"),
        ]
        assert select_ids_to_delete(members) == [2]

    def test_empty_group(self):
        assert select_ids_to_delete([]) == []


class TestDeduplicationScenarios:

    def test_keeps_practiced_record_over_empty_one(self, session, repository, make_flashcard):
        make_flashcard("Hola", "Hello", percentage_correct=0.8, times_seen=10)
        make_flashcard("Hola", "Hello", percentage_correct=0, times_seen=0)

        result = run_dedup(repository)

        assert result.duplicate_groups_found == 1
        assert result.records_deleted == 1
        assert result.remaining_records == 1
        survivors = words_in_store(session, "Hola")
        assert len(survivors) == 1
        assert survivors[0].percentage_correct == 0.8
        assert survivors[0].times_seen == 10

    def test_all_empty_group_keeps_one(self, session, repository, make_flashcard):
        first = make_flashcard("Adios", "Goodbye")
        make_flashcard("Adios", "Goodbye")
        make_flashcard("Adios", "Goodbye")
        first_id = first.id

        result = run_dedup(repository)

        assert result.duplicate_groups_found == 1
        assert result.records_deleted == 2
        assert result.remaining_records == 1
        survivors = words_in_store(session, "Adios")
        assert [f.id for f in survivors] == [first_id]

    def test_spanish_word_is_case_sensitive(self, repository, make_flashcard):
        make_flashcard("hola", "hello")
        make_flashcard("Hola", "Hello")

        result = run_dedup(repository)

        assert result.duplicate_groups_found == 0
        assert result.records_deleted == 0
        assert result.remaining_records == 2

    def test_surrounding_whitespace_is_not_normalized(self, repository, make_flashcard):
        make_flashcard("Hola", "Hello")
        make_flashcard("Hola ", "Hello")

        result = run_dedup(repository)

        assert result.duplicate_groups_found == 0
        assert result.remaining_records == 2

    def test_empty_collection(self, repository):
        result = run_dedup(repository)

        assert result.duplicate_groups_found == 0
        assert result.records_deleted == 0
        assert result.remaining_records == 0

    def test_unresolvable_group_contributes_no_deletions(self, session, repository, make_flashcard):
        make_flashcard("Hola", "Hello", percentage_correct=0.5, times_seen=3)
        make_flashcard("Hola", "Hello")
        make_flashcard("Gracias", "Thank you", percentage_correct=0.8, times_seen=10)
        make_flashcard("Gracias", "Thank you", percentage_correct=0.2, times_seen=5)
        make_flashcard("Gracias", "Thank you", percentage_correct=0, times_seen=1)

        result = run_dedup(repository)

        assert result.duplicate_groups_found == 2
        assert result.records_deleted == 1
        assert result.remaining_records == 4
        assert len(words_in_store(session, "Gracias")) == 3

    def test_unique_records_are_untouched(self, session, repository, make_flashcard):
        make_flashcard("Hola", "Hello")
        make_flashcard("Adios", "Goodbye")
        make_flashcard("Gracias", "Thank you")

        result = run_dedup(repository)

        assert result.duplicate_groups_found == 0
        assert result.records_deleted == 0
        assert result.remaining_records == 3


class TestDeduplicationProperties:

    @pytest.fixture
    def mixed_store(self, make_flashcard):
        make_flashcard("Hola", "Hello", percentage_correct=0.7, times_seen=5)
        make_flashcard("Hola", "Hello")
        make_flashcard("Hola", "Hi")
        make_flashcard("Adios", "Goodbye")
        make_flashcard("Adios", "Bye")
        make_flashcard("Gracias", "Thanks", times_seen=2)
        make_flashcard("Gracias", "Thanks", percentage_correct=0.5, times_seen=2)
        make_flashcard("Casa", "House")
        make_flashcard("casa", "house")

    def test_second_run_finds_nothing(self, repository, mixed_store):
        first = run_dedup(repository)
        second = run_dedup(repository)

        assert first.records_deleted > 0
        assert second.duplicate_groups_found == 1  # Gracias: both copies practiced
        assert second.records_deleted == 0
        assert second.remaining_records == first.remaining_records

    def test_second_run_is_a_no_op_when_every_group_was_resolved(self, repository, make_flashcard):
        make_flashcard("Hola", "Hello", percentage_correct=0.7, times_seen=5)
        make_flashcard("Hola", "Hello")
        make_flashcard("Adios", "Goodbye")
        make_flashcard("Adios", "Goodbye")

        run_dedup(repository)
        second = run_dedup(repository)

        assert second.duplicate_groups_found == 0
        assert second.records_deleted == 0
        assert second.remaining_records == 2

    def test_count_consistency(self, repository, mixed_store):
        before = repository.count_all()

        result = run_dedup(repository)

        assert result.remaining_records == before - result.records_deleted
        assert result.remaining_records == repository.count_all()

    def test_no_group_is_emptied_and_practiced_records_survive(self, session, repository, mixed_store):
        practiced_before = {
            f.id for f in session.exec(select(Flashcard)).all() if not f.is_empty()
        }
        words_before = {f.spanish_word for f in session.exec(select(Flashcard)).all()}

        run_dedup(repository)

        session.expire_all()
        remaining = session.exec(select(Flashcard)).all()
        assert {f.spanish_word for f in remaining} == words_before
        assert practiced_before <= {f.id for f in remaining}
        # Wherever a practiced copy exists, no empty copy is left behind
        for word in ("Hola", "Gracias"):
            assert all(not f.is_empty() for f in words_in_store(session, word))


class TestDeduplicationFailures:

    def test_delete_failure_keeps_earlier_deletes(self, session, make_flashcard):
        make_flashcard("Adios", "Goodbye")
        make_flashcard("Adios", "Goodbye")
        make_flashcard("Hola", "Hello", percentage_correct=1.0, times_seen=1)
        make_flashcard("Hola", "Hello")

        class FailingRepository(FlashcardRepository):
            calls = 0

            def delete_by_id(self, flashcard_id):
                FailingRepository.calls += 1
                if FailingRepository.calls == 2:
                    raise OperationalError("DELETE FROM flashcard", {}, Exception("database is locked"))
                return super().delete_by_id(flashcard_id)

        with pytest.raises(DeduplicationError) as exc_info:
            DeduplicationService(FailingRepository(session)).run()

        assert exc_info.value.records_deleted == 1
        assert exc_info.value.status_code == 500
        assert FlashcardRepository(session).count_all() == 3

        # Re-running converges
        result = run_dedup(FlashcardRepository(session))
        assert result.records_deleted == 1
        assert result.remaining_records == 2

    def test_query_failure_deletes_nothing(self, session, make_flashcard):
        make_flashcard("Adios", "Goodbye")
        make_flashcard("Adios", "Goodbye")

        class BrokenRepository(FlashcardRepository):
            def group_by_natural_key(self):
                raise OperationalError("SELECT", {}, Exception("connection lost"))

        with pytest.raises(DatabaseError):
            DeduplicationService(BrokenRepository(session)).run()

        assert FlashcardRepository(session).count_all() == 2

    def test_record_already_deleted_by_another_run_is_skipped(self, session, make_flashcard):
        make_flashcard("Adios", "Goodbye")
        raced = make_flashcard("Adios", "Goodbye")
        make_flashcard("Adios", "Goodbye")
        raced_id = raced.id

        class RacingRepository(FlashcardRepository):
            def delete_by_id(self, flashcard_id):
                if flashcard_id == raced_id:
                    # A concurrent run got there first
                    super().delete_by_id(flashcard_id)
                return super().delete_by_id(flashcard_id)

        result = DeduplicationService(RacingRepository(session)).run()

        assert result.records_deleted == 1
        assert result.remaining_records == 1

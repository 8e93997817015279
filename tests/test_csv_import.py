"""Tests for CSV import."""

import pytest
from sqlmodel import select

from flashcards_api.core.exceptions import FileProcessingError
from flashcards_api.models.flashcard import Flashcard
from flashcards_api.services.csv_import_service import import_flashcards_from_csv


@pytest.fixture
def write_csv(tmp_path):
    def _write(content, name="words.csv"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


def test_imports_new_words(session, repository, write_csv):
    path = write_csv("spanishword,englishword\n Hola , Hello\nAdios,Goodbye\n")

    created = import_flashcards_from_csv(repository, path)

    assert created == 2
    flashcards = session.exec(select(Flashcard).order_by(Flashcard.id)).all()
    assert [(f.spanish_word, f.english_word, f.category) for f in flashcards] == [
        ("Hola", "Hello", "unassigned"),
        ("Adios", "Goodbye", "unassigned"),
    ]


def test_skips_existing_and_repeated_words(repository, make_flashcard, write_csv):
    make_flashcard("Hola", "Hello", percentage_correct=0.6, times_seen=5)
    path = write_csv("spanishword,englishword\nHola,Hi\nGato,Cat\nGato,Cat\n")

    created = import_flashcards_from_csv(repository, path)

    assert created == 1
    assert repository.count_all() == 2


def test_skips_incomplete_rows(repository, write_csv):
    path = write_csv("SpanishWord,EnglishWord\nHola,\n,Hello\nPerro,Dog\n")

    assert import_flashcards_from_csv(repository, path) == 1


def test_custom_category(session, repository, write_csv):
    path = write_csv("spanishword,englishword\nRojo,Red\n")

    import_flashcards_from_csv(repository, path, category="Colors")

    assert session.exec(select(Flashcard)).one().category == "Colors"


@pytest.mark.parametrize("path, code", [
    (None, "FILE_002"),
    ("", "FILE_002"),
    ("words.txt", "FILE_003"),
    ("/does/not/exist.csv", "FILE_005"),
])
def test_rejects_bad_paths(repository, path, code):
    with pytest.raises(FileProcessingError) as exc_info:
        import_flashcards_from_csv(repository, path)
    assert exc_info.value.code == code
    assert exc_info.value.status_code == 422


def test_upload_endpoint(client, write_csv):
    path = write_csv("spanishword,englishword\nHola,Hello\n")

    res = client.post("/api/flashcards/upload_csv", json={"csvFilePath": path})

    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "message": "CSV file processed successfully",
        "filePath": path,
        "flashcardsCreated": 1,
    }


def test_upload_endpoint_requires_path(client):
    res = client.post("/api/flashcards/upload_csv", json={})

    assert res.status_code == 422
    assert res.json()["error"]["code"] == "FILE_002"

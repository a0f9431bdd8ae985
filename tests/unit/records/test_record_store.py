"""Tests for the in-memory record store."""

from concurrent.futures import ThreadPoolExecutor

import pydantic
import pytest

from doc_library.exceptions import DuplicateEmail
from doc_library.records import DocumentCreate, RecordStore, UserCreate


def _user(email: str, name: str = "Ana García López") -> UserCreate:
    return UserCreate.model_validate({"fullName": name, "email": email})


@pytest.mark.records
class TestUsers:
    def test_create_and_lookup_by_email(self, store):
        user = store.create_user(_user("ana.garcia@email.com"))

        assert store.get_user_by_email("ana.garcia@email.com") == user
        assert store.get_user(user.id) == user
        assert user.phone is None
        assert user.institution is None
        assert user.area_of_interest is None
        assert user.created_at.tzinfo is not None

    def test_distinct_emails_get_distinct_ids(self, store):
        emails = [f"user{i}@example.com" for i in range(25)]
        users = [store.create_user(_user(e)) for e in emails]

        assert len({u.id for u in users}) == 25
        for email, user in zip(emails, users):
            assert store.get_user_by_email(email) == user

    def test_duplicate_email_rejected_and_store_unchanged(self, store):
        store.create_user(_user("carlos@universidad.edu"))

        with pytest.raises(DuplicateEmail):
            store.create_user(_user("carlos@universidad.edu", name="Otro Carlos"))

        assert store.count_users() == 1

    def test_email_match_is_case_sensitive(self, store):
        store.create_user(_user("maria@gmail.com"))
        other = store.create_user(_user("Maria@gmail.com"))

        assert store.count_users() == 2
        assert store.get_user_by_email("Maria@gmail.com") == other
        assert store.get_user_by_email("MARIA@GMAIL.COM") is None

    def test_missing_user(self, store):
        assert store.get_user("nope") is None
        assert store.get_user_by_email("nobody@example.com") is None

    def test_list_users_insertion_order(self, store):
        a = store.create_user(_user("a@example.com"))
        b = store.create_user(_user("b@example.com"))
        c = store.create_user(_user("c@example.com"))

        assert store.list_users() == [a, b, c]

    def test_records_are_immutable(self, store):
        user = store.create_user(_user("frozen@example.com"))

        with pytest.raises(pydantic.ValidationError):
            user.email = "changed@example.com"

    def test_concurrent_duplicate_registration_admits_one(self):
        store = RecordStore()

        def attempt(_):
            try:
                store.create_user(_user("race@example.com"))
                return True
            except DuplicateEmail:
                return False

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(attempt, range(64)))

        assert results.count(True) == 1
        assert store.count_users() == 1


@pytest.mark.records
class TestDocuments:
    def test_create_document_records_file_details(self, store):
        doc = store.create_document(
            DocumentCreate(title="Test", author="A", category="ensayo"),
            "file-1-000000001.pdf",
            "/srv/uploads/file-1-000000001.pdf",
            1234,
        )

        assert store.get_document(doc.id) == doc
        assert doc.file_name == "file-1-000000001.pdf"
        assert doc.file_path == "/srv/uploads/file-1-000000001.pdf"
        assert doc.file_size == 1234
        assert doc.year is None and doc.keywords is None and doc.uploaded_by is None

    def test_same_title_and_author_allowed(self, store):
        data = DocumentCreate(title="Rayuela", author="Julio Cortázar", category="novela")
        a = store.create_document(data, "a.pdf", "/a.pdf", 1)
        b = store.create_document(data, "b.pdf", "/b.pdf", 1)

        assert a.id != b.id
        assert store.count_documents() == 2

    def test_dangling_uploader_tolerated(self, store):
        doc = store.create_document(
            DocumentCreate(title="T", author="A", category="poesia", uploaded_by="no-such-user"),
            "x.pdf",
            "/x.pdf",
            1,
        )
        assert doc.uploaded_by == "no-such-user"

    def test_delete_is_idempotent(self, store, catalog):
        target = catalog[0]

        assert store.delete_document(target.id) is True
        assert store.get_document(target.id) is None
        assert store.delete_document(target.id) is False
        assert store.count_documents() == len(catalog) - 1


@pytest.mark.records
class TestSearch:
    def test_empty_query_returns_everything(self, store, catalog):
        assert store.search_documents("", None) == store.list_documents()
        assert len(store.search_documents("")) == len(catalog)

    def test_title_substring_case_insensitive(self, store, catalog):
        results = store.search_documents("aleph", None)

        assert [d.title for d in results] == ["El Aleph"]
        assert results[0].author == "Jorge Luis Borges"

    def test_author_match(self, store, catalog):
        titles = {d.title for d in store.search_documents("BORGES")}
        assert titles == {"El Aleph", "Ficciones"}

    def test_keywords_and_description_match(self, store, catalog):
        by_keyword = {d.title for d in store.search_documents("realismo mágico")}
        assert by_keyword == {"Cien años de soledad", "La Casa de los Espíritus", "Pedro Páramo"}

        by_description = {d.title for d in store.search_documents("comala")}
        assert by_description == {"Pedro Páramo"}

    def test_category_only(self, store, catalog):
        results = store.search_documents("", "novela")

        assert results
        assert all(d.category == "novela" for d in results)
        assert len(results) == sum(1 for d in catalog if d.category == "novela")

    def test_category_is_exact(self, store, catalog):
        assert store.search_documents("", "Novela") == []
        assert store.search_documents("", "nov") == []

    def test_query_and_category_combine(self, store, catalog):
        assert store.search_documents("borges", "novela") == []
        assert [d.title for d in store.search_documents("ficc", "cuento")] == ["Ficciones"]

    def test_substring_not_tokenized(self, store, catalog):
        assert store.search_documents("soledad cien") == []
        assert len(store.search_documents("años de sol")) == 1

    def test_missing_optional_fields_do_not_match(self, store):
        store.create_document(DocumentCreate(title="Sin datos", author="Anónimo", category="poesia"), "n.pdf", "/n.pdf", 1)

        assert store.search_documents("filosofía") == []
        assert len(store.search_documents("datos")) == 1


@pytest.mark.records
def test_clear_drops_all_records(store, catalog):
    store.create_user(_user("x@example.com"))
    store.clear()

    assert store.list_users() == []
    assert store.list_documents() == []

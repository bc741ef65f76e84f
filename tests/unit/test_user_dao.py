"""Unit tests for UserDao and the shared BaseDao helpers."""

import pytest

from wutup.common.exceptions import ErrorCode, WutupError
from wutup.dao import UserDao
from wutup.types import PaginationData, User


@pytest.fixture
def user_dao(engine, query_settings):
    return UserDao(engine, query_settings)


class TestUserCrud:
    """Test create/find/update/delete."""

    def test_create_with_id(self, user_dao):
        initial = user_dao.find_number_of_users()

        user_id = user_dao.create_user(User(id=9000, first_name="Ringo", last_name="Starr"))

        assert user_id == 9000
        assert user_dao.find_number_of_users() == initial + 1
        assert user_dao.find_user_by_id(9000).first_name == "Ringo"

    def test_create_without_id_uses_next_key(self, user_dao):
        max_id = user_dao.find_max_id()

        user_id = user_dao.create_user(User(first_name="George", last_name="Harrison"))

        assert user_id == max_id + 1
        assert user_dao.find_user_by_id(user_id).last_name == "Harrison"

    def test_create_duplicate_id_fails(self, user_dao):
        with pytest.raises(WutupError) as exc_info:
            user_dao.create_user(User(id=3503, first_name="Imposter"))
        assert exc_info.value.error_code == ErrorCode.DUPLICATE_KEY_ERROR

    def test_find_by_id_maps_every_column(self, user_dao, john):
        assert user_dao.find_user_by_id(3503) == john

    def test_find_missing_user_fails(self, user_dao):
        with pytest.raises(WutupError) as exc_info:
            user_dao.find_user_by_id(1000)

        assert exc_info.value.error_code == ErrorCode.RESOURCE_NOT_FOUND
        assert exc_info.value.details["resource_id"] == "1000"

    def test_update(self, user_dao):
        user = user_dao.find_user_by_id(8)
        user.nickname = "toal"

        user_dao.update_user(user)

        assert user_dao.find_user_by_id(8).nickname == "toal"

    def test_update_missing_user_fails(self, user_dao):
        with pytest.raises(WutupError) as exc_info:
            user_dao.update_user(User(id=1000, first_name="Nobody"))
        assert exc_info.value.error_code == ErrorCode.RESOURCE_NOT_FOUND

    def test_delete(self, user_dao):
        initial = user_dao.find_number_of_users()

        user_dao.delete_user(3504)

        assert user_dao.find_number_of_users() == initial - 1
        with pytest.raises(WutupError):
            user_dao.find_user_by_id(3504)

    def test_delete_missing_user_fails(self, user_dao):
        with pytest.raises(WutupError) as exc_info:
            user_dao.delete_user(1000)
        assert exc_info.value.error_code == ErrorCode.RESOURCE_NOT_FOUND

    def test_counts_and_max_id(self, user_dao):
        assert user_dao.find_number_of_users() == 4
        assert user_dao.find_max_id() == 3504


class TestFindUsers:
    """Test the builder-backed finder."""

    def test_find_all_ordered_by_id(self, user_dao):
        assert [u.id for u in user_dao.find_users()] == [1, 8, 3503, 3504]

    def test_first_name_prefix(self, user_dao):
        assert [u.id for u in user_dao.find_users(first_name="Jo")] == [3503]

    def test_last_name_and_email(self, user_dao):
        users = user_dao.find_users(last_name="Mc", email="paul@example.com")
        assert [u.id for u in users] == [3504]

    def test_no_match(self, user_dao):
        assert user_dao.find_users(email="nobody@example.com") == []

    def test_apostrophe_in_email(self, user_dao):
        assert user_dao.find_users(email="o'neil@example.com") == []

        user_dao.create_user(User(
            id=9001, first_name="Shaq", last_name="O'Neal", email="o'neal@example.com",
        ))

        assert [u.id for u in user_dao.find_users(email="o'neal@example.com")] == [9001]
        assert [u.id for u in user_dao.find_users(last_name="O'N")] == [9001]

    def test_wildcards_in_prefix_match_literally(self, user_dao):
        assert user_dao.find_users(first_name="_ohn") == []
        assert user_dao.find_users(last_name="%") == []

        user_dao.create_user(User(id=9002, first_name="100%", last_name="Pure"))

        assert [u.id for u in user_dao.find_users(first_name="100%")] == [9002]

    def test_pagination(self, user_dao):
        first = user_dao.find_users(pagination=PaginationData(page_number=0, page_size=3))
        second = user_dao.find_users(pagination=PaginationData(page_number=1, page_size=3))

        assert [u.id for u in first] == [1, 8, 3503]
        assert [u.id for u in second] == [3504]

    def test_page_size_above_maximum_rejected(self, user_dao):
        with pytest.raises(WutupError) as exc_info:
            user_dao.find_users(pagination=PaginationData(page_size=101))
        assert exc_info.value.error_code == ErrorCode.INVALID_ARGUMENT


class TestBaseDao:
    """Test the shared helpers through UserDao."""

    def test_missing_pagination_uses_default_page_size(self, user_dao):
        pagination = user_dao.resolve_pagination(None)

        assert pagination.page_size == 10
        assert pagination.page_number == 0

    def test_sql_errors_are_wrapped(self, user_dao):
        with pytest.raises(WutupError) as exc_info:
            user_dao.fetch_all("select * from no_such_table")

        assert exc_info.value.error_code == ErrorCode.QUERY_EXECUTION_ERROR
        assert exc_info.value.details["query"] == "select * from no_such_table"

    def test_fetch_one_returns_none_when_empty(self, user_dao):
        assert user_dao.fetch_one("select id from user where id = :id", {"id": -1}) is None

    def test_builder_uses_dao_settings(self, engine, query_settings):
        settings = query_settings.model_copy(update={"location_alias": "loc"})
        builder = UserDao(engine, settings).query_builder()

        assert builder.location_alias == "loc"

    def test_quote_doubles_single_quotes(self, user_dao):
        assert user_dao.quote("O'Neil") == "'O''Neil'"
        assert user_dao.quote(None) is None

    def test_like_prefix_escapes_wildcards(self, user_dao):
        assert user_dao.like_prefix("50%_off\\") == "50\\%\\_off\\\\"
        assert user_dao.like_prefix("O'Neil") == "O''Neil"
        assert user_dao.like_prefix(None) is None

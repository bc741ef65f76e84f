from typing import List, Optional

from wutup.common.exceptions import resource_not_found_error
from wutup.dao.base import LIKE_ESCAPE, BaseDao
from wutup.dao.mappers import map_user
from wutup.logging import get_logger
from wutup.types.entities import User
from wutup.types.query import PaginationData

logger = get_logger(__name__)

_USER_FIELDS = "id, firstName, lastName, email, nickname"

CREATE_SQL = (
    "insert into user (id, firstName, lastName, email, nickname) "
    "values (:id, :firstName, :lastName, :email, :nickname)"
)
UPDATE_SQL = (
    "update user set firstName = :firstName, lastName = :lastName, "
    "email = :email, nickname = :nickname where id = :id"
)
DELETE_SQL = "delete from user where id = :id"
FIND_BY_ID_SQL = f"select {_USER_FIELDS} from user where id = :id"
FIND_MAX_ID_SQL = "select max(id) from user"
COUNT_SQL = "select count(*) from user"


class UserDao(BaseDao):
    """Data access for the user table."""

    resource_type = "user"

    @staticmethod
    def _params(user: User) -> dict:
        return {
            "id": user.id,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "email": user.email,
            "nickname": user.nickname,
        }

    def create_user(self, user: User) -> int:
        """Insert a user, assigning the next free id when ``user.id`` is None.

        Returns:
            The id of the stored user

        Raises:
            WutupError: DUPLICATE_KEY_ERROR if the id is taken
        """
        with self.transaction() as conn:
            params = self._params(user)
            if params["id"] is None:
                params["id"] = self.next_id(conn, "user")
            self._run(conn, CREATE_SQL, params)
        logger.info(f"Created user #{params['id']}")
        return params["id"]

    def find_user_by_id(self, user_id: int) -> User:
        row = self.fetch_one(FIND_BY_ID_SQL, {"id": user_id})
        if row is None:
            raise resource_not_found_error(
                f"No such user: {user_id}", resource_type="user", resource_id=user_id
            )
        return map_user(row)

    def update_user(self, user: User) -> None:
        if self.execute(UPDATE_SQL, self._params(user)) == 0:
            raise resource_not_found_error(
                f"No such user: {user.id}", resource_type="user", resource_id=user.id
            )
        logger.info(f"Updated user #{user.id}")

    def delete_user(self, user_id: int) -> None:
        if self.execute(DELETE_SQL, {"id": user_id}) == 0:
            raise resource_not_found_error(
                f"No such user: {user_id}", resource_type="user", resource_id=user_id
            )
        logger.info(f"Deleted user #{user_id}")

    def find_users(
        self,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        pagination: Optional[PaginationData] = None,
    ) -> List[User]:
        """Find users, filtering by name prefixes and exact email."""
        builder = (
            self.query_builder()
            .select(*_USER_FIELDS.split(", "))
            .from_("user")
            .like(f"firstName like :firstName {LIKE_ESCAPE}", self.like_prefix(first_name))
            .like(f"lastName like :lastName {LIKE_ESCAPE}", self.like_prefix(last_name))
            .where("email = :email", self.quote(email))
            .order("id")
            .add_pagination(self.resolve_pagination(pagination))
        )
        return [map_user(row) for row in self.fetch_built(builder)]

    def find_number_of_users(self) -> int:
        return int(self.scalar(COUNT_SQL))

    def find_max_id(self) -> int:
        """Largest user id, 0 for an empty table."""
        return int(self.scalar(FIND_MAX_ID_SQL) or 0)

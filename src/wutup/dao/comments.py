"""Comment support shared by the event, venue and occurrence DAOs.

Each owning entity keeps its comments in its own table
(``event_comment``, ``venue_comment``, ``occurrence_comment``) with the
same columns apart from the owner key.
"""

from typing import List, Optional

from wutup.common.exceptions import resource_not_found_error
from wutup.dao.mappers import COMMENT_COLUMNS, USER_COLUMNS, aliased_columns, map_comment
from wutup.logging import get_logger
from wutup.types.entities import Comment
from wutup.types.query import PaginationData

logger = get_logger(__name__)


class CommentDaoMixin:
    """Mixin adding comment operations to a BaseDao subclass.

    Subclasses set:
        comment_table: Table holding the comments
        comment_owner_column: Column referencing the owning entity
    """

    comment_table: str
    comment_owner_column: str

    def add_comment(self, object_id: int, comment: Comment) -> int:
        """Attach a comment to the object, generating an id when needed.

        Returns:
            The id of the stored comment
        """
        with self.transaction() as conn:
            comment_id = comment.id
            if comment_id is None:
                comment_id = self.next_id(conn, self.comment_table)
            self._run(
                conn,
                f"insert into {self.comment_table} "
                f"(id, {self.comment_owner_column}, authorId, body, postDate) "
                f"values (:id, :objectId, :authorId, :body, :postDate)",
                {
                    "id": comment_id,
                    "objectId": object_id,
                    "authorId": comment.author.id,
                    "body": comment.body,
                    "postDate": self.timestamp(comment.post_date),
                },
            )
        logger.info(f"Added comment #{comment_id} to {self.resource_type} #{object_id}")
        return comment_id

    def update_comment(self, object_id: int, comment: Comment) -> None:
        updated = self.execute(
            f"update {self.comment_table} set body = :body, postDate = :postDate "
            f"where id = :id and {self.comment_owner_column} = :objectId",
            {
                "id": comment.id,
                "objectId": object_id,
                "body": comment.body,
                "postDate": self.timestamp(comment.post_date),
            },
        )
        if updated == 0:
            raise resource_not_found_error(
                f"No such comment {comment.id} on {self.resource_type} {object_id}",
                resource_type="comment",
                resource_id=comment.id,
            )

    def find_comments(
        self,
        object_id: int,
        pagination: Optional[PaginationData] = None,
    ) -> List[Comment]:
        """Comments on the object, oldest first."""
        builder = (
            self.query_builder()
            .select(*aliased_columns("c", COMMENT_COLUMNS),
                    *aliased_columns("u", USER_COLUMNS, "author"))
            .from_(f"{self.comment_table} c")
            .join_on("user u", "c.authorId = u.id")
            .where(f"c.{self.comment_owner_column} = :objectId", object_id)
            .order("c.postDate, c.id")
            .add_pagination(self.resolve_pagination(pagination))
        )
        return [map_comment(row) for row in self.fetch_built(builder)]

    def delete_comment(self, object_id: int, comment_id: int) -> None:
        deleted = self.execute(
            f"delete from {self.comment_table} "
            f"where id = :id and {self.comment_owner_column} = :objectId",
            {"id": comment_id, "objectId": object_id},
        )
        if deleted == 0:
            raise resource_not_found_error(
                f"No such comment {comment_id} on {self.resource_type} {object_id}",
                resource_type="comment",
                resource_id=comment_id,
            )

    def find_max_key_value_for_comments(self) -> int:
        """Largest comment id in the table, 0 when there are none."""
        return int(self.scalar(f"select max(id) from {self.comment_table}") or 0)

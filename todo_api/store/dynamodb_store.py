"""DynamoDB-backed todo store."""

import asyncio

from botocore.exceptions import ClientError

from todo_api.store.base import StoreError, StoreErrorKind, TodoStore

# Error codes meaning "no item under this key to apply the write against"
UPDATE_NOT_FOUND_CODES = {"ConditionalCheckFailedException", "ValidationException"}
DELETE_NOT_FOUND_CODES = {"ConditionalCheckFailedException"}

KEY_EXISTS = "attribute_exists(todoId)"


def _translate_error(err: ClientError, not_found_codes: set[str]) -> StoreError:
    code = err.response.get("Error", {}).get("Code", "")
    message = err.response.get("Error", {}).get("Message", str(err))
    if code in not_found_codes:
        return StoreError(StoreErrorKind.NOT_FOUND, message)
    return StoreError(StoreErrorKind.OTHER, f"{code}: {message}")


class DynamoDBTodoStore(TodoStore):
    """Stores todos in a DynamoDB table with partition key todoId."""

    def __init__(self, table_name: str, region: str = "us-east-1"):
        self._table_name = table_name
        self._region = region
        self._table = None

    def _get_table(self):
        """Lazy-init boto3 Table resource."""
        if self._table is None:
            import boto3

            dynamodb = boto3.resource("dynamodb", region_name=self._region)
            self._table = dynamodb.Table(self._table_name)
        return self._table

    async def get(self, todo_id: str) -> dict | None:
        resp = await asyncio.to_thread(self._get_table().get_item, Key={"todoId": todo_id})
        return resp.get("Item")

    async def put(self, item: dict) -> None:
        await asyncio.to_thread(self._get_table().put_item, Item=item)

    async def update(self, todo_id: str, fields: dict) -> dict:
        kwargs = self._build_update(todo_id, fields)
        try:
            resp = await asyncio.to_thread(self._get_table().update_item, **kwargs)
        except ClientError as e:
            raise _translate_error(e, UPDATE_NOT_FOUND_CODES) from e
        return resp.get("Attributes", {})

    async def delete(self, todo_id: str) -> None:
        try:
            await asyncio.to_thread(
                self._get_table().delete_item,
                Key={"todoId": todo_id},
                ConditionExpression=KEY_EXISTS,
            )
        except ClientError as e:
            raise _translate_error(e, DELETE_NOT_FOUND_CODES) from e

    async def scan_all(self) -> list[dict]:
        # Single page only; the list endpoint does not paginate
        resp = await asyncio.to_thread(self._get_table().scan)
        return resp.get("Items", [])

    @staticmethod
    def _build_update(todo_id: str, fields: dict) -> dict:
        """Build update_item params: SET #attr = :attr for every field."""
        names = {}
        values = {}
        clauses = []
        for attr, value in fields.items():
            names[f"#{attr}"] = attr
            values[f":{attr}"] = value
            clauses.append(f"#{attr} = :{attr}")

        return {
            "Key": {"todoId": todo_id},
            "UpdateExpression": "SET " + ", ".join(clauses),
            "ExpressionAttributeNames": names,
            "ExpressionAttributeValues": values,
            "ConditionExpression": KEY_EXISTS,
            "ReturnValues": "ALL_NEW",
        }

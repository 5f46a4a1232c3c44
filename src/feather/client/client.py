"""Feather API endpoints."""

from typing import List

from feather.client.base_client import BaseApiClient
from feather.client.http import JSON_HEADERS, Content
from feather.client.models import Todo, VariableListObject


class FeatherClient(BaseApiClient):
    """Client for the Feather API.

    Each endpoint is a fixed GET request with JSON headers plus the delegate's bearer token, if any.
    Status codes are not mapped to errors.

    Example:
        client = FeatherClient("https://jsonplaceholder.typicode.com")
        content = await client.todos()
        if content.ok:
            titles = [todo.title for todo in content.content]
        elif content.status_code == 400:
            ...
    """

    async def todos(self) -> Content[List[Todo]]:
        return await self.send(List[Todo], "todos", headers=[*JSON_HEADERS, *self.auth_headers()])

    async def variables(self) -> Content[List[VariableListObject]]:
        return await self.send(List[VariableListObject], "variables", headers=[*JSON_HEADERS, *self.auth_headers()])

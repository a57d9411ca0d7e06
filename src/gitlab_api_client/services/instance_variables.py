"""Instance level CI/CD variables.

GitLab API docs: https://docs.gitlab.com/api/instance_level_ci_variables/
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List, Optional, Protocol, runtime_checkable
from urllib.parse import quote

import structlog

from ..models.variables import (
    CreateInstanceVariableOptions,
    InstanceVariable,
    ListInstanceVariablesOptions,
    UpdateInstanceVariableOptions,
)

if TYPE_CHECKING:
    from ..clients.gitlab_client import GitLabClient
    from ..clients.request_options import RequestOption

logger = structlog.get_logger(__name__)

VARIABLES_PATH = "admin/ci/variables"


def variable_path(key: str) -> str:
    """Path of a single variable; every reserved character in the key is escaped."""
    escaped = quote(key, safe='')
    # "." and ".." would be collapsed as dot segments when the URL is normalised
    if escaped in (".", ".."):
        escaped = escaped.replace(".", "%2E")
    return f"{VARIABLES_PATH}/{escaped}"


@runtime_checkable
class InstanceVariablesServiceInterface(Protocol):
    def list_variables(
        self, opt: Optional[ListInstanceVariablesOptions] = None, *options: RequestOption
    ) -> List[InstanceVariable]: ...

    def get_variable(self, key: str, *options: RequestOption) -> InstanceVariable: ...

    def create_variable(
        self, opt: CreateInstanceVariableOptions, *options: RequestOption
    ) -> InstanceVariable: ...

    def update_variable(
        self, key: str, opt: UpdateInstanceVariableOptions, *options: RequestOption
    ) -> InstanceVariable: ...

    def remove_variable(self, key: str, *options: RequestOption) -> None: ...


class InstanceVariablesService:
    """
    Handles communication with the instance level CI variables methods of the
    GitLab API. Requires an administrator token.
    """

    def __init__(self, client: GitLabClient):
        self.client = client

    def list_variables(
        self,
        opt: Optional[ListInstanceVariablesOptions] = None,
        *options: RequestOption,
    ) -> List[InstanceVariable]:
        """
        List one page of instance variables in server order.

        Args:
            opt: Pagination options (page, per_page)
            *options: Request options

        Returns:
            Variables on the requested page
        """
        req = self.client.new_request("GET", VARIABLES_PATH, opt, options)
        variables, _ = self.client.do(req, List[InstanceVariable])
        return variables

    def iter_variables(
        self,
        opt: Optional[ListInstanceVariablesOptions] = None,
        *options: RequestOption,
    ) -> Iterator[InstanceVariable]:
        """
        Iterate over every instance variable, requesting pages lazily.

        Starts at ``opt.page`` (or the first page) and follows the X-Next-Page
        header until GitLab reports no further page.
        """
        page = opt.page if opt and opt.page else 1
        per_page = opt.per_page if opt and opt.per_page else self.client.settings.DEFAULT_PAGE_SIZE

        while True:
            page_opt = ListInstanceVariablesOptions(page=page, per_page=per_page)
            req = self.client.new_request("GET", VARIABLES_PATH, page_opt, options)
            variables, resp = self.client.do(req, List[InstanceVariable])
            yield from variables

            next_page = resp.pagination.next_page
            if not next_page or next_page <= page:
                return
            logger.debug("Fetching next page of instance variables", page=next_page)
            page = next_page

    def get_variable(self, key: str, *options: RequestOption) -> InstanceVariable:
        """
        Get a single variable by key.

        Raises:
            NotFoundError: No variable has this key
        """
        req = self.client.new_request("GET", variable_path(key), None, options)
        variable, _ = self.client.do(req, InstanceVariable)
        return variable

    def create_variable(
        self,
        opt: CreateInstanceVariableOptions,
        *options: RequestOption,
    ) -> InstanceVariable:
        """
        Create a new instance variable.

        Args:
            opt: Key, value and optional attributes; omitted attributes take
                GitLab's defaults
            *options: Request options

        Returns:
            The variable as stored by GitLab

        Raises:
            ValidationError: GitLab rejected the attributes, including a key
                that is already taken
            ConflictError: The key already exists, when GitLab reports it as 409
        """
        req = self.client.new_request("POST", VARIABLES_PATH, opt, options)
        variable, _ = self.client.do(req, InstanceVariable)
        logger.info("Created instance variable", key=variable.key)
        return variable

    def update_variable(
        self,
        key: str,
        opt: UpdateInstanceVariableOptions,
        *options: RequestOption,
    ) -> InstanceVariable:
        """
        Update an existing instance variable. Attributes left as None keep
        their current value.

        Raises:
            NotFoundError: No variable has this key
        """
        req = self.client.new_request("PUT", variable_path(key), opt, options)
        variable, _ = self.client.do(req, InstanceVariable)
        logger.info("Updated instance variable", key=key)
        return variable

    def remove_variable(self, key: str, *options: RequestOption) -> None:
        """
        Remove an instance variable.

        Raises:
            NotFoundError: No variable has this key
        """
        req = self.client.new_request("DELETE", variable_path(key), None, options)
        self.client.do(req, None)
        logger.info("Removed instance variable", key=key)

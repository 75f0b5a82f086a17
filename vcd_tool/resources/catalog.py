"""
Catalog resource handler.
"""

import logging
from typing import Optional

import httpx

from ..errors import ObjectNotFoundError, VcdError
from ..models.resources import CatalogSpec, CatalogState
from ..models.vcd_api import Catalog, find_reference
from ..utils.retry import RetryableError, retry_call
from .base import BaseResource


class CatalogResource(BaseResource):
    """
    Manage a catalog of the client's org, identified by its name.

    Creation is idempotent: an existing catalog of the same name is adopted
    instead of failing.
    """

    kind = "catalog"

    @staticmethod
    def _state(catalog: Catalog) -> CatalogState:
        return CatalogState(
            name=catalog.name,
            description=catalog.description,
            id=catalog.id,
            href=catalog.href,
            is_published=catalog.is_published,
        )

    def create(self, spec: CatalogSpec) -> CatalogState:
        try:
            catalog = self.client.find_catalog(spec.name)
            logging.info("Catalog %s already exists, adopting it", spec.name)
            return self._state(catalog)
        except ObjectNotFoundError:
            logging.debug("No catalog %s found, preparing creation", spec.name)

        admin_org = self.client.get_admin_org()
        self._run_task(
            lambda: self.client.create_catalog(admin_org, spec.name, spec.description),
            f"create catalog {spec.name}",
        )

        self.client.refresh_org()
        return self._state(self.client.find_catalog(spec.name))

    def read(self, resource_id: str) -> Optional[CatalogState]:
        self.client.refresh_org()
        try:
            catalog = self.client.find_catalog(resource_id)
        except ObjectNotFoundError:
            logging.debug("Unable to find catalog %s", resource_id)
            return None
        return self._state(catalog)

    def update(self, resource_id: str, spec: CatalogSpec) -> Optional[CatalogState]:
        """Set the catalog description; returns None when the catalog is gone."""
        self.client.refresh_org()
        admin_org = self.client.get_admin_org()
        try:
            admin_catalog = self.client.find_admin_catalog(admin_org, resource_id)
        except ObjectNotFoundError:
            logging.debug("Unable to find catalog %s", resource_id)
            return None

        admin_catalog.description = spec.description
        updated = self.client.update_admin_catalog(admin_catalog)
        logging.info("Updated catalog %s", resource_id)
        return self._state(updated)

    def delete(self, resource_id: str) -> None:
        """
        Delete the catalog and its items, then wait until the org stops listing it.

        Raises:
            ObjectNotFoundError: If the catalog does not exist
            RetryTimeoutError: If the catalog is still listed when the budget runs out
        """
        self.client.refresh_org()
        admin_org = self.client.get_admin_org()
        admin_catalog = self.client.find_admin_catalog(admin_org, resource_id)
        self.client.delete_admin_catalog(admin_catalog, force=True, recursive=True)

        def wait_until_gone() -> None:
            try:
                current = self.client.refresh_admin_org(admin_org)
            except httpx.HTTPError as e:
                logging.debug("Refreshing admin org failed, polling again: %s", e)
                raise RetryableError(e) from e
            if find_reference(current.catalogs, resource_id) is not None:
                logging.debug("Waiting until catalog %s is deleted", resource_id)
                raise RetryableError(VcdError(f"Catalog {resource_id} is not deleted yet"))

        retry_call(wait_until_gone, self._retry_policy())


__all__ = ["CatalogResource"]

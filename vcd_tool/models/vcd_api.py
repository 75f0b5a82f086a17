"""
Pydantic models for vCloud Director API responses.

vCD speaks XML, so every response model knows how to build itself from an
``ElementTree`` element (``from_xml``). Only the attributes and children the
client navigates are decoded; the rest of the document is ignored.
"""

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import LinkNotFoundError
from ..utils.constants import TASK_NON_TERMINAL_STATES, TASK_SUCCESS_STATE
from ..utils.xml_utils import child_text, find_child, find_path, iter_children, local_name, parse_bool


# ============================================================================
# Base Models
# ============================================================================


class VcdBaseModel(BaseModel):
    """Base model for all vCD API responses."""

    model_config = ConfigDict(extra="allow")  # Allow extra fields from API


class Link(VcdBaseModel):
    """A ``<Link>`` element: a typed, named pointer to a related object or action."""

    rel: str
    href: str
    type: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_xml(cls, element: ET.Element) -> "Link":
        return cls(
            rel=element.get("rel", ""),
            href=element.get("href", ""),
            type=element.get("type"),
            name=element.get("name"),
        )


class Reference(VcdBaseModel):
    """Reference to another object (``<CatalogReference>``, ``<ResourceEntity>``, ...)."""

    href: str
    name: str = ""
    type: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_xml(cls, element: ET.Element) -> "Reference":
        return cls(
            href=element.get("href", ""),
            name=element.get("name", ""),
            type=element.get("type"),
            id=element.get("id"),
        )


def parse_links(element: ET.Element) -> List[Link]:
    return [Link.from_xml(child) for child in iter_children(element, "Link")]


def parse_references(element: ET.Element, container: str, item: str) -> List[Reference]:
    """Decode ``<container><item .../>...</container>`` into references."""
    parent = find_child(element, container)
    if parent is None:
        return []
    return [Reference.from_xml(child) for child in iter_children(parent, item)]


def find_reference(references: List[Reference], name: str) -> Optional[Reference]:
    """Return the first reference called ``name``."""
    for reference in references:
        if reference.name == name:
            return reference
    return None


def find_link(links: List[Link], type_: Optional[str], rel: str, name: Optional[str] = None) -> Optional[Link]:
    """
    Find the first link matching a relation, and optionally a type and name.

    A ``type_`` of None matches links of any type.
    """
    for link in links:
        if link.rel != rel:
            continue
        if type_ is not None and link.type != type_:
            continue
        if name is not None and link.name != name:
            continue
        return link
    return None


# ============================================================================
# Task Models
# ============================================================================


class Task(VcdBaseModel):
    """A vCD task: the handle of an asynchronous operation."""

    href: str
    name: str = ""
    id: Optional[str] = None
    type: Optional[str] = None
    status: str = ""
    operation: str = ""
    operation_name: str = ""
    description: str = ""
    error_message: Optional[str] = None
    links: List[Link] = Field(default_factory=list)

    @classmethod
    def from_xml(cls, element: ET.Element) -> "Task":
        error = find_child(element, "Error")
        description = child_text(element, "Description") or child_text(element, "Details")
        return cls(
            href=element.get("href", ""),
            name=element.get("name", ""),
            id=element.get("id"),
            type=element.get("type"),
            status=element.get("status", ""),
            operation=element.get("operation", ""),
            operation_name=element.get("operationName", ""),
            description=description,
            error_message=error.get("message") if error is not None else None,
            links=parse_links(element),
        )

    @property
    def is_complete(self) -> bool:
        """Check if the task has reached a terminal state."""
        return self.status not in TASK_NON_TERMINAL_STATES

    @property
    def is_successful(self) -> bool:
        """Check if the task finished successfully."""
        return self.status == TASK_SUCCESS_STATE


# ============================================================================
# Entity Models
# ============================================================================


class VcdEntity(VcdBaseModel):
    """Fields shared by every addressable vCD object."""

    href: str = ""
    name: str = ""
    id: Optional[str] = None
    type: Optional[str] = None
    description: str = ""
    links: List[Link] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)

    @classmethod
    def from_xml(cls, element: ET.Element):
        return cls(**cls._fields_from_xml(element))

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        tasks_element = find_child(element, "Tasks")
        tasks = []
        if tasks_element is not None:
            tasks = [Task.from_xml(task) for task in iter_children(tasks_element, "Task")]
        return {
            "href": element.get("href", ""),
            "name": element.get("name", ""),
            "id": element.get("id"),
            "type": element.get("type"),
            "description": child_text(element, "Description"),
            "links": parse_links(element),
            "tasks": tasks,
        }

    def find_link(self, type_: Optional[str], rel: str, name: Optional[str] = None) -> Optional[Link]:
        return find_link(self.links, type_, rel, name)

    def url_for_type(self, type_: Optional[str], rel: str) -> str:
        """
        Return the href of the link with the given type and relation.

        Raises:
            LinkNotFoundError: If the object does not expose such a link
        """
        link = self.find_link(type_, rel)
        if link is None:
            raise LinkNotFoundError(
                f"{self.name or self.href or 'object'} does not have a link: type={type_ or ''}, rel={rel}"
            )
        return link.href


class Session(VcdEntity):
    """Body of a successful login: links to the org, query service and logout."""

    user: str = ""
    org: str = ""

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        fields["user"] = element.get("user", "")
        fields["org"] = element.get("org", "")
        return fields


class Org(VcdEntity):
    """Organization; catalogs and VDCs are reachable through its links."""

    full_name: str = ""

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        fields["full_name"] = child_text(element, "FullName")
        return fields


class AdminOrg(Org):
    """Administrator view of an organization, used for create/update/delete."""

    catalogs: List[Reference] = Field(default_factory=list)
    vdcs: List[Reference] = Field(default_factory=list)

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        fields["catalogs"] = parse_references(element, "Catalogs", "CatalogReference")
        fields["vdcs"] = parse_references(element, "Vdcs", "Vdc")
        return fields


class Catalog(VcdEntity):
    catalog_items: List[Reference] = Field(default_factory=list)
    is_published: bool = False

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        fields["catalog_items"] = parse_references(element, "CatalogItems", "CatalogItem")
        fields["is_published"] = parse_bool(child_text(element, "IsPublished"))
        return fields


class AdminCatalog(Catalog):
    """Administrator view of a catalog."""


class CatalogItem(VcdEntity):
    """Catalog entry pointing at a vApp template or a media image."""

    entity: Optional[Reference] = None

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        entity = find_child(element, "Entity")
        fields["entity"] = Reference.from_xml(entity) if entity is not None else None
        return fields


class FileDescriptor(VcdBaseModel):
    """One file of a media or template upload, with its transfer links."""

    name: str = ""
    size: int = 0
    bytes_transferred: int = 0
    links: List[Link] = Field(default_factory=list)

    @classmethod
    def from_xml(cls, element: ET.Element) -> "FileDescriptor":
        return cls(
            name=element.get("name", ""),
            size=int(element.get("size", "0") or 0),
            bytes_transferred=int(element.get("bytesTransferred", "0") or 0),
            links=parse_links(element),
        )


class Media(VcdEntity):
    image_type: str = ""
    size: int = 0
    files: List[FileDescriptor] = Field(default_factory=list)

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        fields["image_type"] = element.get("imageType", "")
        fields["size"] = int(element.get("size", "0") or 0)
        files = find_child(element, "Files")
        fields["files"] = [FileDescriptor.from_xml(f) for f in iter_children(files, "File")] if files is not None else []
        return fields


class VAppTemplate(VcdEntity):
    pass


class Vdc(VcdEntity):
    """Virtual data center: holds disks, vApps, networks and storage profiles."""

    resource_entities: List[Reference] = Field(default_factory=list)
    available_networks: List[Reference] = Field(default_factory=list)
    storage_profiles: List[Reference] = Field(default_factory=list)

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        fields["resource_entities"] = parse_references(element, "ResourceEntities", "ResourceEntity")
        fields["available_networks"] = parse_references(element, "AvailableNetworks", "Network")
        fields["storage_profiles"] = parse_references(element, "VdcStorageProfiles", "VdcStorageProfile")
        return fields

    def find_entity(self, name: str, type_: str) -> Optional[Reference]:
        """First resource entity with the given name and media type."""
        for reference in self.resource_entities:
            if reference.type == type_ and reference.name == name:
                return reference
        return None


class Disk(VcdEntity):
    """Independent disk. ``size`` is in bytes."""

    size: int = 0
    iops: Optional[int] = None
    bus_type: Optional[str] = None
    bus_sub_type: Optional[str] = None
    storage_profile: Optional[Reference] = None
    owner: Optional[Reference] = None

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        size = element.get("size")
        size_mb = element.get("sizeMb")
        if size:
            fields["size"] = int(size)
        elif size_mb:
            fields["size"] = int(size_mb) * 1024 * 1024
        iops = element.get("iops")
        fields["iops"] = int(iops) if iops else None
        fields["bus_type"] = element.get("busType")
        fields["bus_sub_type"] = element.get("busSubType")
        profile = find_child(element, "StorageProfile")
        fields["storage_profile"] = Reference.from_xml(profile) if profile is not None else None
        owner = find_path(element, "Owner", "User")
        fields["owner"] = Reference.from_xml(owner) if owner is not None else None
        return fields


class IpRange(VcdBaseModel):
    start_address: str
    end_address: str


class OrgVdcNetwork(VcdEntity):
    fence_mode: str = ""
    gateway: str = ""
    netmask: str = ""
    dns1: str = ""
    dns2: str = ""
    dns_suffix: str = ""
    ip_ranges: List[IpRange] = Field(default_factory=list)
    is_shared: bool = False
    edge_gateway: Optional[Reference] = None

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        configuration = find_child(element, "Configuration")
        if configuration is not None:
            fields["fence_mode"] = child_text(configuration, "FenceMode")
            scope = find_path(configuration, "IpScopes", "IpScope")
            if scope is not None:
                fields["gateway"] = child_text(scope, "Gateway")
                fields["netmask"] = child_text(scope, "Netmask")
                fields["dns1"] = child_text(scope, "Dns1")
                fields["dns2"] = child_text(scope, "Dns2")
                fields["dns_suffix"] = child_text(scope, "DnsSuffix")
                ranges = find_child(scope, "IpRanges")
                if ranges is not None:
                    fields["ip_ranges"] = [
                        IpRange(
                            start_address=child_text(item, "StartAddress"),
                            end_address=child_text(item, "EndAddress"),
                        )
                        for item in iter_children(ranges, "IpRange")
                    ]
        edge = find_child(element, "EdgeGateway")
        fields["edge_gateway"] = Reference.from_xml(edge) if edge is not None else None
        fields["is_shared"] = parse_bool(child_text(element, "IsShared"))
        return fields


class Vm(VcdEntity):
    status: Optional[int] = None
    deployed: bool = False

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        status = element.get("status")
        fields["status"] = int(status) if status else None
        fields["deployed"] = parse_bool(element.get("deployed"))
        return fields


class VApp(Vm):
    """A vApp; ``vms`` lists the VMs embedded in its ``<Children>``."""

    vms: List[Vm] = Field(default_factory=list)

    @classmethod
    def _fields_from_xml(cls, element: ET.Element) -> Dict[str, Any]:
        fields = super()._fields_from_xml(element)
        children = find_child(element, "Children")
        fields["vms"] = [Vm.from_xml(vm) for vm in iter_children(children, "Vm")] if children is not None else []
        return fields


# ============================================================================
# Query and Bootstrap Models
# ============================================================================


class QueryResultRecords(VcdBaseModel):
    """Result of a typed query in ``records`` format; each record is its attribute map."""

    name: str = ""
    total: int = 0
    records: List[Dict[str, str]] = Field(default_factory=list)

    @classmethod
    def from_xml(cls, element: ET.Element) -> "QueryResultRecords":
        records = []
        for child in element:
            tag = local_name(child.tag)
            if tag.endswith("Record"):
                records.append({"record_type": tag, **child.attrib})
        total = element.get("total")
        return cls(name=element.get("name", ""), total=int(total) if total else len(records), records=records)


class VersionInfo(VcdBaseModel):
    version: str
    login_url: str
    deprecated: bool = False


class SupportedVersions(VcdBaseModel):
    """Body of ``GET /api/versions``."""

    versions: List[VersionInfo] = Field(default_factory=list)

    @classmethod
    def from_xml(cls, element: ET.Element) -> "SupportedVersions":
        return cls(
            versions=[
                VersionInfo(
                    version=child_text(info, "Version"),
                    login_url=child_text(info, "LoginUrl"),
                    deprecated=parse_bool(info.get("deprecated")),
                )
                for info in iter_children(element, "VersionInfo")
            ]
        )

    def login_url_for(self, api_version: str) -> Optional[str]:
        """LoginUrl of ``api_version``, or of the last listed version when it is not offered."""
        for info in self.versions:
            if info.version == api_version:
                return info.login_url
        if self.versions:
            return self.versions[-1].login_url
        return None


class VmReferences(VcdBaseModel):
    """Body of a disk's attached-VMs link."""

    vms: List[Reference] = Field(default_factory=list)

    @classmethod
    def from_xml(cls, element: ET.Element) -> "VmReferences":
        return cls(vms=[Reference.from_xml(ref) for ref in iter_children(element, "VmReference")])


__all__ = [
    "VcdBaseModel",
    "Link",
    "Reference",
    "parse_links",
    "parse_references",
    "find_reference",
    "find_link",
    "Task",
    "VcdEntity",
    "Session",
    "Org",
    "AdminOrg",
    "Catalog",
    "AdminCatalog",
    "CatalogItem",
    "FileDescriptor",
    "Media",
    "VAppTemplate",
    "Vdc",
    "Disk",
    "IpRange",
    "OrgVdcNetwork",
    "Vm",
    "VApp",
    "QueryResultRecords",
    "VersionInfo",
    "SupportedVersions",
    "VmReferences",
]

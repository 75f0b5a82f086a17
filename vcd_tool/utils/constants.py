"""
Central constants for the vcd-tool package.

This module consolidates the vCloud Director media types, link relations,
task states and client defaults used throughout the codebase.
"""

# ============================================================================
# API and Network Constants
# ============================================================================

# Default timeout for HTTP requests (seconds)
DEFAULT_TIMEOUT = 120

# TLS handshake / connect timeout (seconds)
DEFAULT_CONNECT_TIMEOUT = 120.0

# Default vCloud API version sent in the Accept header
DEFAULT_API_VERSION = "27.0"

# Header carrying the session token returned by the login request
AUTH_HEADER = "x-vcloud-authorization"

# XML namespace of vCloud API bodies
NS_VCLOUD = "http://www.vmware.com/vcloud/v1.5"

# OVF envelope namespace, used for section descriptions in vApp bodies
NS_OVF = "http://schemas.dmtf.org/ovf/envelope/1"

# Default budget for retried operations (seconds)
DEFAULT_MAX_RETRY_TIMEOUT = 60

# ============================================================================
# Task Management Constants
# ============================================================================

# Fixed interval between task status checks (seconds)
TASK_POLL_INTERVAL = 1

# Task states that mean the task has not finished yet
TASK_NON_TERMINAL_STATES = ("queued", "preRunning", "running")

# The only terminal state that counts as success
TASK_SUCCESS_STATE = "success"

# ============================================================================
# Retry Constants
# ============================================================================

# Fixed interval between generic retry attempts (seconds)
DEFAULT_RETRY_INTERVAL = 1.0

# Fixed interval between attempts while an object is busy (seconds)
BUSY_RETRY_INTERVAL = 3.0

# Error message fragment returned by vCD for objects locked by another task
BUSY_ERROR_MESSAGE = "is busy, cannot proceed"

# ============================================================================
# Media Types
# ============================================================================

MIME_ORG = "application/vnd.vmware.vcloud.org+xml"
MIME_ADMIN_ORG = "application/vnd.vmware.admin.organization+xml"
MIME_CATALOG = "application/vnd.vmware.vcloud.catalog+xml"
MIME_ADMIN_CATALOG = "application/vnd.vmware.admin.catalog+xml"
MIME_CATALOG_ITEM = "application/vnd.vmware.vcloud.catalogItem+xml"
MIME_VDC = "application/vnd.vmware.vcloud.vdc+xml"
MIME_QUERY_LIST = "application/vnd.vmware.vcloud.query.queryList+xml"
MIME_QUERY_RECORDS = "application/vnd.vmware.vcloud.query.records+xml"
MIME_TASK = "application/vnd.vmware.vcloud.task+xml"
MIME_DISK = "application/vnd.vmware.vcloud.disk+xml"
MIME_DISK_CREATE_PARAMS = "application/vnd.vmware.vcloud.diskCreateParams+xml"
MIME_VMS = "application/vnd.vmware.vcloud.vms+xml"
MIME_MEDIA = "application/vnd.vmware.vcloud.media+xml"
MIME_VAPP = "application/vnd.vmware.vcloud.vApp+xml"
MIME_VM = "application/vnd.vmware.vcloud.vm+xml"
MIME_VAPP_TEMPLATE = "application/vnd.vmware.vcloud.vAppTemplate+xml"
MIME_COMPOSE_VAPP_PARAMS = "application/vnd.vmware.vcloud.composeVAppParams+xml"
MIME_INSTANTIATE_VAPP_TEMPLATE_PARAMS = "application/vnd.vmware.vcloud.instantiateVAppTemplateParams+xml"
MIME_UNDEPLOY_VAPP_PARAMS = "application/vnd.vmware.vcloud.undeployVAppParams+xml"
MIME_ORG_VDC_NETWORK = "application/vnd.vmware.vcloud.orgVdcNetwork+xml"
MIME_EDGE_GATEWAY = "application/vnd.vmware.admin.edgeGateway+xml"

# ============================================================================
# Link Relations
# ============================================================================

REL_DOWN = "down"
REL_UP = "up"
REL_ADD = "add"
REL_EDIT = "edit"
REL_REMOVE = "remove"
REL_ALTERNATE = "alternate"
REL_ENABLE = "enable"
REL_UNDEPLOY = "undeploy"
REL_TASK_CANCEL = "task:cancel"
REL_DOWNLOAD_DEFAULT = "download:default"
REL_UPLOAD_DEFAULT = "upload:default"
REL_EDGE_GATEWAYS = "edgeGateways"

# ============================================================================
# Default Paths
# ============================================================================

# Default configuration file path
DEFAULT_CONFIG_PATH = "~/.config/vcd/cli.toml"

# Section of the configuration file holding the connection settings
CONFIG_SECTION = "vcd"

# ============================================================================
# Exit Codes
# ============================================================================

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_USER_INTERRUPT = 130  # User pressed Ctrl+C

# ============================================================================
# HTTP Status Codes
# ============================================================================

HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_SERVER_ERROR = 500

# ============================================================================
# Size Units
# ============================================================================

# Base-2 multipliers accepted in disk size strings
SIZE_UNITS = {
    "B": 1,
    "KB": 1024,
    "KIB": 1024,
    "MB": 1024**2,
    "MIB": 1024**2,
    "GB": 1024**3,
    "GIB": 1024**3,
    "TB": 1024**4,
    "TIB": 1024**4,
    "PB": 1024**5,
    "PIB": 1024**5,
    "EB": 1024**6,
    "EIB": 1024**6,
}


__all__ = [
    "DEFAULT_TIMEOUT",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_API_VERSION",
    "AUTH_HEADER",
    "NS_VCLOUD",
    "NS_OVF",
    "DEFAULT_MAX_RETRY_TIMEOUT",
    "TASK_POLL_INTERVAL",
    "TASK_NON_TERMINAL_STATES",
    "TASK_SUCCESS_STATE",
    "DEFAULT_RETRY_INTERVAL",
    "BUSY_RETRY_INTERVAL",
    "BUSY_ERROR_MESSAGE",
    "MIME_ORG",
    "MIME_ADMIN_ORG",
    "MIME_CATALOG",
    "MIME_ADMIN_CATALOG",
    "MIME_CATALOG_ITEM",
    "MIME_VDC",
    "MIME_QUERY_LIST",
    "MIME_QUERY_RECORDS",
    "MIME_TASK",
    "MIME_DISK",
    "MIME_DISK_CREATE_PARAMS",
    "MIME_VMS",
    "MIME_MEDIA",
    "MIME_VAPP",
    "MIME_VM",
    "MIME_VAPP_TEMPLATE",
    "MIME_COMPOSE_VAPP_PARAMS",
    "MIME_INSTANTIATE_VAPP_TEMPLATE_PARAMS",
    "MIME_UNDEPLOY_VAPP_PARAMS",
    "MIME_ORG_VDC_NETWORK",
    "MIME_EDGE_GATEWAY",
    "REL_DOWN",
    "REL_UP",
    "REL_ADD",
    "REL_EDIT",
    "REL_REMOVE",
    "REL_ALTERNATE",
    "REL_ENABLE",
    "REL_UNDEPLOY",
    "REL_TASK_CANCEL",
    "REL_DOWNLOAD_DEFAULT",
    "REL_UPLOAD_DEFAULT",
    "REL_EDGE_GATEWAYS",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_SECTION",
    "EXIT_SUCCESS",
    "EXIT_GENERAL_ERROR",
    "EXIT_USER_INTERRUPT",
    "HTTP_STATUS_UNAUTHORIZED",
    "HTTP_STATUS_FORBIDDEN",
    "HTTP_STATUS_NOT_FOUND",
    "HTTP_STATUS_SERVER_ERROR",
    "SIZE_UNITS",
]

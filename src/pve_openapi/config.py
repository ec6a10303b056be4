"""Static document metadata and defaults."""

from pydantic import BaseModel

OPENAPI_VERSION = "3.0.0"
DEFAULT_VARIABLE = "apiSchema"
DEFAULT_OUTPUT_NAME = "proxmox-api-swagger.json"


class DocumentSettings(BaseModel):
    """Metadata written around the converted paths."""

    title: str = "Proxmox VE API"
    description: str = "Proxmox Virtual Environment API"
    version: str = "1.0.0"
    server_url: str = "https://{host}:8006/api2/json"
    host: str = "localhost"
    host_description: str = "Proxmox server hostname"

    def info(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "version": self.version,
        }

    def server(self) -> dict:
        return {
            "url": self.server_url,
            "variables": {
                "host": {
                    "default": self.host,
                    "description": self.host_description,
                }
            },
        }

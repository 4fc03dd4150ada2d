"""Services for the core app.

Services that import models are not exported here, so that importing this
package during app loading does not touch the model registry. Import them
from their modules.
"""

from core.services.email_service import EmailService
from core.services.health_service import HealthService, health_service

__all__ = [
    "EmailService",
    "HealthService",
    "health_service",
]

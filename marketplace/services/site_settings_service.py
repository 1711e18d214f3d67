from sqlmodel import Session

from marketplace.config import settings
from marketplace.models.site_settings import SiteSettings
from marketplace.schemas.site_config import SiteConfig, SiteConfigUpdate
from marketplace.utils.timestamps import utcnow


def _default_row() -> SiteSettings:
    return SiteSettings(
        id=1,
        commission_rate=settings.commission_rate,
        tax_enabled=settings.tax_enabled,
        tax_rate=settings.tax_rate,
        admin_bank_details=settings.admin_bank_details,
    )


def _to_config(row: SiteSettings) -> SiteConfig:
    return SiteConfig(
        commission_rate=row.commission_rate,
        tax_enabled=row.tax_enabled,
        tax_rate=row.tax_rate,
        admin_bank_details=row.admin_bank_details or "",
    )


def get_site_config(session: Session) -> SiteConfig:
    """Saved commerce settings, or the environment defaults when none are saved."""
    row = session.get(SiteSettings, 1)
    if not row:
        row = _default_row()
    return _to_config(row)


def update_site_config(session: Session, data: SiteConfigUpdate) -> SiteConfig:
    row = session.get(SiteSettings, 1)

    if not row:
        row = _default_row()
        session.add(row)

    for field, value in data.model_dump(exclude_none=True).items():
        setattr(row, field, value)

    row.updated_at = utcnow()
    session.commit()
    session.refresh(row)

    return _to_config(row)

from pydantic import BaseModel, Field, field_validator

from app.models.enums import SubscriptionMode


class UpdatePlanRequest(BaseModel):
    user_id: str | None = Field("", alias="userId", validate_default=True)
    subscription_mode: str | None = Field("", alias="subscriptionMode", validate_default=True)

    model_config = {"populate_by_name": True}

    @field_validator("user_id", "subscription_mode")
    @classmethod
    def strip_value(cls, v: str | None) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Missing userId or subscriptionMode")
        return v

    def mode(self) -> SubscriptionMode | None:
        try:
            return SubscriptionMode(self.subscription_mode)
        except ValueError:
            return None

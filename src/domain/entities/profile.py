"""Profile creation input and its user / organization partitions."""

from pydantic import BaseModel, ConfigDict, Field


class UserFields(BaseModel):
    """Personal fields sent to the identity service."""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    name: str | None = None
    newsletter_opt_in: bool | None = Field(None, alias="newsletterOptIn")

    def to_payload(self) -> dict:
        """Wire shape: camelCase keys, unset fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class OrganizationFields(BaseModel):
    """Organization fields. `name` comes from the draft's `orgName`."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    github_handle: str | None = Field(None, alias="githubHandle")
    twitter_handle: str | None = Field(None, alias="twitterHandle")
    website: str | None = None

    def to_payload(self) -> dict:
        """Wire shape: camelCase keys, unset fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ProfileDraft(BaseModel):
    """Raw create-profile form submission.

    Accepts both the form's camelCase keys (`orgName`, `githubHandle`, ...)
    and snake_case names. Unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str
    name: str | None = None
    newsletter_opt_in: bool | None = Field(None, alias="newsletterOptIn")
    org_name: str | None = Field(None, alias="orgName")
    github_handle: str | None = Field(None, alias="githubHandle")
    twitter_handle: str | None = Field(None, alias="twitterHandle")
    website: str | None = None

    @property
    def has_organization(self) -> bool:
        """True if at least one organization field is non-empty."""
        return bool(self.org_name or self.github_handle or self.twitter_handle or self.website)

    def split(self) -> tuple[UserFields, OrganizationFields | None]:
        """Partition into user fields and organization fields.

        Organization is None when no organization field is populated, so the
        service can tell "no organization" from "organization with blank name".
        """
        user = UserFields(
            email=self.email,
            name=self.name,
            newsletter_opt_in=self.newsletter_opt_in,
        )
        if not self.has_organization:
            return user, None
        organization = OrganizationFields(
            name=self.org_name or None,
            github_handle=self.github_handle or None,
            twitter_handle=self.twitter_handle or None,
            website=self.website or None,
        )
        return user, organization

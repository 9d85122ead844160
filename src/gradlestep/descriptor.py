# descriptor.py
from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .installations import InstallationSnapshot, InstallationStore
from .model import GradleBuilder, GradleInstallation


class FormError(ValueError):
    """Raised when submitted step configuration cannot be bound."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


# -------------------- Schemas --------------------

class GradleBuilderForm(BaseModel):
    """Form data of the build step, as the configuration page submits it."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    description: Optional[str] = None
    switches: Optional[str] = None
    tasks: Optional[str] = None
    root_build_script_dir: Optional[str] = Field(default=None, alias="rootBuildScriptDir")
    build_file: Optional[str] = Field(default=None, alias="buildFile")
    gradle_name: Optional[str] = Field(default=None, alias="gradleName")

    def to_builder(self) -> GradleBuilder:
        return GradleBuilder(**self.model_dump())


class GradleInstallationForm(BaseModel):
    name: str = Field(min_length=1)
    home: str

    def to_installation(self) -> GradleInstallation:
        return GradleInstallation(name=self.name.strip(), home=self.home.strip())


def _form_error(e: ValidationError) -> FormError:
    first = e.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return FormError(f"{loc}: {first.get('msg')}" if loc else str(first.get("msg")), field=loc or None)


# -------------------- Descriptors --------------------

class GradleBuilderDescriptor:
    """
    Describes the "Invoke Gradle script" step and owns the installations.

    Installations are stored here (not on the tool descriptor) so data saved
    by older releases keeps loading.
    """

    display_name = "Invoke Gradle script"
    help_file = "/plugin/gradle/help.html"

    def __init__(self, store: Optional[InstallationStore] = None):
        self.store = store if store is not None else InstallationStore()

    def is_applicable(self, job_type: Any) -> bool:
        return True

    @property
    def installations(self) -> InstallationSnapshot:
        return self.store.installations

    def set_installations(self, *installations: GradleInstallation) -> None:
        self.store.replace(*installations)

    def convert(self, old_property_bag: Mapping[str, Any]) -> None:
        self.store.convert(old_property_bag)

    def new_instance(self, form_data: Mapping[str, Any]) -> GradleBuilder:
        """
        Bind submitted form data into a step.

        Raises:
            FormError: If the data has the wrong shape
        """
        try:
            return GradleBuilderForm.model_validate(dict(form_data)).to_builder()
        except ValidationError as e:
            raise _form_error(e) from e


class GradleInstallationDescriptor:
    """Tool descriptor for Gradle; storage is delegated to the step descriptor."""

    display_name = "Gradle"

    def __init__(self, builder_descriptor: GradleBuilderDescriptor):
        self.builder_descriptor = builder_descriptor

    @property
    def installations(self) -> InstallationSnapshot:
        return self.builder_descriptor.installations

    def set_installations(self, *installations: GradleInstallation) -> None:
        self.builder_descriptor.set_installations(*installations)

    def new_installation(self, form_data: Mapping[str, Any]) -> GradleInstallation:
        try:
            return GradleInstallationForm.model_validate(dict(form_data)).to_installation()
        except ValidationError as e:
            raise _form_error(e) from e


# Global descriptor (replaced by the host at startup)
_descriptor: Optional[GradleBuilderDescriptor] = None


def get_descriptor() -> GradleBuilderDescriptor:
    global _descriptor
    if _descriptor is None:
        _descriptor = GradleBuilderDescriptor()
    return _descriptor


def set_descriptor(descriptor: GradleBuilderDescriptor) -> None:
    global _descriptor
    _descriptor = descriptor

"""
Exceptions raised while building or persisting a content model.

Every failure aborts the whole import run. Errors carry the URIs of the
offending resource, property and target so the statement can be located in
the source ontology.
"""

from typing import Optional


class ContentModelError(Exception):
    """Base class for all content model errors."""

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        property_uri: Optional[str] = None,
        target: Optional[str] = None,
    ):
        self.message = message
        self.resource = resource
        self.property_uri = property_uri
        self.target = target
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result = {"error": type(self).__name__, "message": self.message}
        if self.resource:
            result["resource"] = self.resource
        if self.property_uri:
            result["property"] = self.property_uri
        if self.target:
            result["target"] = self.target
        return result


class MissingArgumentError(ContentModelError):
    """A required resource or property was None."""

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"Error: parameter '{argument}' missing")


class ClassHierarchyCycleError(ContentModelError):
    """The rdfs:subClassOf relation contains a cycle."""

    def __init__(self, class_uri: str, cycle: list):
        self.cycle = cycle
        path = " -> ".join(cycle)
        super().__init__(
            f"Circular rdfs:subClassOf chain detected below {class_uri}: {path}",
            resource=class_uri,
        )


class UnresolvedBundleError(ContentModelError):
    """No direct subclass of duo:Node matched a content resource."""

    def __init__(self, resource: str):
        super().__init__(
            f"Could not determine the bundle of '{resource}'. "
            f"Content resources must be instances or subclasses of a direct subclass of duo:Node.",
            resource=resource,
        )


class UnmappableReferenceError(ContentModelError):
    """A referenced resource does not belong to any known target kind."""

    def __init__(
        self,
        resource: str,
        property_uri: str,
        target: str,
        message: Optional[str] = None,
    ):
        super().__init__(
            message or (
                f"Could not determine target fields for '{resource}' and property "
                f"'{property_uri}' (target '{target}')."
            ),
            resource=resource,
            property_uri=property_uri,
            target=target,
        )


class UnsupportedReferenceError(UnmappableReferenceError):
    """A referenced resource has a target kind that cannot be imported yet."""

    def __init__(self, resource: str, property_uri: str, target: str, kind: str):
        self.kind = kind
        super().__init__(
            resource,
            property_uri,
            target,
            message=(
                f"References to {kind} resources are not supported "
                f"('{resource}' -> '{target}' via '{property_uri}')."
            ),
        )


class MixedReferenceKindsError(ContentModelError):
    """One field references targets of different reference kinds."""

    def __init__(self, resource: str, property_uri: str, target: str, kinds: tuple):
        self.kinds = kinds
        super().__init__(
            f"Property '{property_uri}' of '{resource}' mixes "
            f"{kinds[0]} and {kinds[1]} references (at target '{target}').",
            resource=resource,
            property_uri=property_uri,
            target=target,
        )


class MissingFieldOverrideError(ContentModelError):
    """An Entity target was referenced without an axiom naming the field to project."""

    def __init__(self, resource: str, property_uri: str, target: str):
        super().__init__(
            f"Error: Entity '{target}' referenced by '{resource}' but no field given "
            f"({property_uri}). Annotate the axiom with duo:field.",
            resource=resource,
            property_uri=property_uri,
            target=target,
        )


class VocabularyConflictError(ContentModelError):
    """A vocabulary with the same vid already exists and overwrite is off."""

    def __init__(self, vid: str):
        self.vid = vid
        super().__init__(
            f"Error: vocabulary with vid '{vid}' already exists. "
            f"Enable overwrite if you want to replace it and try again."
        )


class UnresolvedNodeReferenceError(ContentModelError):
    """A node field references a title that no created node carries."""

    def __init__(self, resource: str, field_name: str, title: str):
        self.field_name = field_name
        self.title = title
        super().__init__(
            f"Node '{resource}' references unknown node '{title}' in field '{field_name}'.",
            resource=resource,
            target=title,
        )

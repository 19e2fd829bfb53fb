"""Generic CRUD class that works with Pydantic schemas to eliminate boilerplate."""
from flask import jsonify, request
from eshs_shared.validation import ValidationError, format_pydantic_errors
from ..gateway import RecordNotFound
from pydantic import ValidationError as PydanticValidationError
import logging
from typing import Optional, Callable, Any, Dict, Iterable, List


class GenericCRUD:
    """Generic CRUD class that automatically handles Pydantic validation and serialization.

    One instance serves one resource. Every store access goes through the
    injected persistence gateway, so the same instance works against any
    gateway a test hands it.

    Usage:
        crud = GenericCRUD(
            gateway,
            model=Department,
            create_schema=DepartmentCreate,
            update_schema=DepartmentUpdate,
            response_schema=DepartmentRecord,
            order_by=(Department.name.asc(),),
            singular='department',
            plural='departments',
        )
    """

    def __init__(
        self,
        gateway,
        model: type,
        create_schema: type,
        update_schema: type,
        response_schema: type,
        order_by: Iterable = (),
        singular: Optional[str] = None,
        plural: Optional[str] = None,
        logger_name: Optional[str] = None,
        references: Optional[Dict[str, str]] = None,
        collections: Optional[Dict[str, Callable[[Any, List[Dict]], List]]] = None,
        list_filter: Optional[Callable[[Any], List]] = None,
        delete_guard: Optional[Callable[[Any, int], None]] = None,
        pre_create_hook: Optional[Callable[[Dict], Dict]] = None,
        pre_update_hook: Optional[Callable[[Dict, Any], Dict]] = None,
        storage=None,
        attachment_fields: Iterable[str] = (),
    ):
        """Initialize generic CRUD class.

        Args:
            gateway: PersistenceGateway used for every store access
            model: SQLAlchemy model class
            create_schema: Pydantic schema for creation (declares required fields)
            update_schema: Pydantic schema for partial updates
            response_schema: Pydantic schema that reshapes a stored record
            order_by: Sort expressions for the list operation; ascending id breaks ties
            singular: Display noun used in messages (defaults to the table name)
            plural: Display noun used for list failures
            logger_name: Optional logger name (defaults to model table name)
            references: Maps a ``{"id": n}`` payload field to its foreign key
                       column, e.g. ``{'document_type': 'document_type_id'}``
            collections: Maps a list-valued payload field to a resolver taking
                        (gateway, items) and returning the related records to
                        assign to the relationship of the same name. May raise ValidationError.
            list_filter: Optional function taking the query-string args and
                        returning extra SQLAlchemy criteria. May raise ValidationError.
            delete_guard: Optional function taking (gateway, resource_id) that
                         raises ValidationError when the record may not be deleted.
            pre_create_hook: Optional function to run after Pydantic validation but before creation.
                           Takes validated_data dict, returns modified dict.
            pre_update_hook: Optional function to run after Pydantic validation but before update.
                           Takes (validated_data, resource) tuple, returns modified dict.
            storage: Attachment storage used to remove files the record no longer points at
            attachment_fields: Columns holding attachment URLs. A replaced URL is
                              removed after the update, every URL after the delete.
        """
        self.gateway = gateway
        self.model = model
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.response_schema = response_schema
        self.order_by = tuple(order_by)
        self.singular = singular or model.__tablename__.rstrip('s').replace('_', ' ')
        self.plural = plural or model.__tablename__.replace('_', ' ')
        self.references = references or {}
        self.collections = collections or {}
        self.list_filter = list_filter
        self.delete_guard = delete_guard
        self.pre_create_hook = pre_create_hook
        self.pre_update_hook = pre_update_hook
        self.storage = storage
        self.attachment_fields = tuple(attachment_fields)
        self.logger = logging.getLogger(logger_name or model.__tablename__)

    def log(self, level, message, operation, record_id=None, **kwargs):
        """Log with the resource, operation and record id attached as structured fields."""
        fields = {'resource': self.plural, 'operation': operation}
        if record_id is not None:
            fields['record_id'] = record_id
        self.logger.log(level, message, extra={'extra_fields': fields}, **kwargs)

    def get_list(self, args=None):
        """Get every record of the resource, optionally narrowed by query-string filters.

        Returns:
            Flask JSON response with an array of serialized records
        """
        try:
            criteria = self.list_filter(args or {}) if self.list_filter else []
            records = self.gateway.find_many(self.model, order_by=self.order_by, criteria=criteria)
            return jsonify([self.serialize(record) for record in records])
        except ValidationError as e:
            self.log(logging.WARNING, f"Invalid filter for {self.plural}: {e}", 'list')
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            self.log(logging.ERROR, f"Failed to fetch {self.plural}: {e}", 'list', exc_info=True)
            return jsonify({'error': f'Failed to fetch {self.plural}'}), 500

    def get_detail(self, resource_id):
        """Get single resource by ID.

        Args:
            resource_id: Primary key ID of the resource

        Returns:
            Flask JSON response with resource data
        """
        try:
            resource = self.gateway.get(self.model, resource_id)
            return jsonify(self.serialize(resource))
        except RecordNotFound as e:
            return self.not_found(e, 'detail')
        except Exception as e:
            self.log(logging.ERROR, f"Failed to fetch {self.singular} {resource_id}: {e}", 'detail',
                     resource_id, exc_info=True)
            return jsonify({'error': f'Failed to fetch {self.singular}'}), 500

    def create(self):
        """Create a new resource with automatic Pydantic validation.

        Returns:
            Flask JSON response with the created record
        """
        try:
            data = self.get_json_data()
            validated_data = self.resolve_collections(self.resolve_references(self.validate_create_data(data)))

            if self.pre_create_hook:
                validated_data = self.pre_create_hook(validated_data)

            resource = self.gateway.create(self.model, validated_data)

            self.log(logging.INFO, f"Created {self.singular}: {resource.id}", 'create', resource.id)
            return jsonify(self.serialize(resource)), 201

        except ValidationError as e:
            self.log(logging.WARNING, f"Validation error in {self.singular} creation: {e}", 'create')
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            self.log(logging.ERROR, f"Failed to create {self.singular}: {e}", 'create', exc_info=True)
            return jsonify({'error': f'Failed to create {self.singular}'}), 500

    def update(self, resource_id):
        """Update an existing resource with automatic Pydantic validation.

        Only the supplied fields change. Attachments whose URL was replaced are
        removed from storage once the update is committed.

        Args:
            resource_id: Primary key ID of the resource

        Returns:
            Flask JSON response with the updated record
        """
        try:
            data = self.get_json_data()
            resource = self.gateway.get(self.model, resource_id)
            previous = self.attachment_urls(resource)

            validated_data = self.resolve_collections(self.resolve_references(self.validate_update_data(data)))

            if self.pre_update_hook:
                validated_data = self.pre_update_hook(validated_data, resource)

            resource = self.gateway.update(self.model, resource_id, validated_data)

            self.log(logging.INFO, f"Updated {self.singular}: {resource_id}", 'update', resource_id)
            self.discard_attachments(
                [url for field, url in previous.items()
                 if field in validated_data and validated_data[field] != url],
                'update', resource_id
            )
            return jsonify(self.serialize(resource))

        except RecordNotFound as e:
            return self.not_found(e, 'update')
        except ValidationError as e:
            self.log(logging.WARNING, f"Validation error in {self.singular} update: {e}", 'update', resource_id)
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            self.log(logging.ERROR, f"Failed to update {self.singular}: {e}", 'update', resource_id, exc_info=True)
            return jsonify({'error': f'Failed to update {self.singular}'}), 500

    def delete(self, resource_id):
        """Delete a resource, then its attachments.

        Args:
            resource_id: Primary key ID of the resource

        Returns:
            Flask JSON response ``{"success": true}``
        """
        try:
            resource = self.gateway.get(self.model, resource_id)
            attachments = list(self.attachment_urls(resource).values())

            if self.delete_guard:
                self.delete_guard(self.gateway, resource_id)

            self.gateway.delete(self.model, resource_id)

            self.log(logging.INFO, f"Deleted {self.singular}: {resource_id}", 'delete', resource_id)
            self.discard_attachments(attachments, 'delete', resource_id)
            return jsonify({'success': True})
        except RecordNotFound as e:
            return self.not_found(e, 'delete')
        except ValidationError as e:
            self.log(logging.WARNING, f"Refused to delete {self.singular} {resource_id}: {e}", 'delete', resource_id)
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            self.log(logging.ERROR, f"Failed to delete {self.singular}: {e}", 'delete', resource_id, exc_info=True)
            return jsonify({'error': f'Failed to delete {self.singular}'}), 500

    def not_found(self, exc, operation):
        self.log(logging.INFO, f"Lookup failed: {exc}", operation, exc.record_id)
        return jsonify({'error': f'{self.singular.capitalize()} not found'}), 404

    def attachment_urls(self, resource):
        return {field: getattr(resource, field) for field in self.attachment_fields}

    def discard_attachments(self, urls, operation, resource_id):
        """Best-effort removal of stored files; failures are logged, never raised."""
        for url in urls:
            if not url:
                continue
            try:
                self.storage.discard(url)
            except Exception as e:
                self.log(logging.WARNING, f"Could not remove attachment {url}: {e}", operation, resource_id)

    def serialize(self, resource):
        """Serialize resource using Pydantic response schema.

        Args:
            resource: SQLAlchemy model instance

        Returns:
            Dictionary representation of the resource
        """
        return self.response_schema.model_validate(resource).model_dump(mode='json', by_alias=True)

    def resolve_references(self, validated_data):
        """Replace ``{"id": n}`` reference payloads with their foreign key value."""
        for field, column in self.references.items():
            if field in validated_data:
                reference = validated_data.pop(field)
                validated_data[column] = reference['id'] if reference is not None else None
        return validated_data

    def resolve_collections(self, validated_data):
        """Turn list payloads into the related records they name; null clears the list."""
        for field, resolver in self.collections.items():
            if field in validated_data:
                validated_data[field] = resolver(self.gateway, validated_data[field] or [])
        return validated_data

    def validate_create_data(self, data):
        """Validate data for creation using Pydantic schema.

        Args:
            data: Raw request data dictionary

        Returns:
            Validated data dictionary ready for model creation

        Raises:
            ValidationError: If validation fails
        """
        try:
            validated = self.create_schema.model_validate(data)
            return validated.model_dump(exclude_none=True)
        except PydanticValidationError as e:
            raise ValidationError(format_pydantic_errors(e))

    def validate_update_data(self, data):
        """Validate data for update using Pydantic schema.

        Fields left out of the payload are left out of the result. A field the
        create schema requires may not be cleared with null.

        Args:
            data: Raw request data dictionary

        Returns:
            Validated data dictionary ready for model update

        Raises:
            ValidationError: If validation fails
        """
        try:
            validated = self.update_schema.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(format_pydantic_errors(e))

        changes = validated.model_dump(exclude_unset=True)
        cleared = [
            self.field_label(name) for name, value in changes.items()
            if value is None and name in self.create_schema.model_fields
            and self.create_schema.model_fields[name].is_required()
        ]
        if cleared:
            raise ValidationError('; '.join(f"{name} is required" for name in cleared))
        return changes

    def field_label(self, name):
        """Name of a field as the client spells it."""
        alias = self.update_schema.model_fields[name].validation_alias
        return alias if isinstance(alias, str) else name

    def get_json_data(self):
        """Get and validate JSON data from request.

        Returns:
            Dictionary of request JSON data

        Raises:
            ValidationError: If JSON is invalid or not a dict
        """
        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError('Request body must contain valid JSON')
        if not isinstance(data, dict):
            raise ValidationError('Request data must be a JSON object')
        return data


ALL_OPERATIONS = ('list', 'detail', 'create', 'update', 'delete')


def register_crud_routes(bp, crud_instance, resource_name, operations=ALL_OPERATIONS):
    """Register standard CRUD routes for a blueprint.

    Args:
        bp: Flask Blueprint instance
        crud_instance: GenericCRUD instance
        resource_name: URL path of the resource (e.g., 'departments', 'risks/legal-requirements')
        operations: Subset of ``ALL_OPERATIONS`` to expose

    This function registers:
        GET /api/{resource_name} - List resources
        GET /api/{resource_name}/<id> - Get single resource
        POST /api/{resource_name} - Create resource
        PUT /api/{resource_name}/<id> - Update resource
        DELETE /api/{resource_name}/<id> - Delete resource
    """
    endpoint = resource_name.replace('/', '_').replace('-', '_')
    collection_url = f'/{resource_name}'
    item_url = f'/{resource_name}/<int:resource_id>'

    def get_list():
        """Get all resources, narrowed by any query-string filters."""
        return crud_instance.get_list(request.args)

    def get_detail(resource_id):
        """Get single resource by ID."""
        return crud_instance.get_detail(resource_id)

    def create():
        """Create a new resource."""
        return crud_instance.create()

    def update(resource_id):
        """Update an existing resource."""
        return crud_instance.update(resource_id)

    def delete(resource_id):
        """Delete a resource."""
        return crud_instance.delete(resource_id)

    routes = {
        'list': (collection_url, get_list, 'GET'),
        'detail': (item_url, get_detail, 'GET'),
        'create': (collection_url, create, 'POST'),
        'update': (item_url, update, 'PUT'),
        'delete': (item_url, delete, 'DELETE'),
    }
    for operation in operations:
        url, view, method = routes[operation]
        bp.add_url_rule(url, endpoint=f'{endpoint}_{operation}', view_func=view, methods=[method])

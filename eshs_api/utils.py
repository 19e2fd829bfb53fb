"""Backend utility functions for the ESHS dashboard API."""
from flask import jsonify
from sqlalchemy import select
from eshs_shared.validation import ValidationError
from .models import (
    db, Department, Document, DocumentType, ScreeningForm, Subproject, SpecificObjective, StrategicObjective,
    ImpactAssessment, RiskAndImpact, EnvironmentalFactor,
)
import logging


logger = logging.getLogger(__name__)


# Collection name mapped to its (foreign key column, referenced model) pairs
REFERENCES = {
    'documents': [(Document.document_type_id, DocumentType)],
    'screening_forms': [(ScreeningForm.subproject_id, Subproject)],
    'specific_objectives': [(SpecificObjective.strategic_objective_id, StrategicObjective)],
    'impact_assessments': [
        (ImpactAssessment.department_id, Department),
        (ImpactAssessment.subproject_id, Subproject),
        (ImpactAssessment.risks_and_impact_id, RiskAndImpact),
        (ImpactAssessment.environmental_factor_id, EnvironmentalFactor),
    ],
}


def api_error(message, status_code=400, log_level='warning', details=None):
    """
    Standardized API error response with consistent logging.

    Args:
        message (str): Error message for the client
        status_code (int): HTTP status code
        log_level (str): Logging level ('debug', 'info', 'warning', 'error', 'critical')
        details (dict, optional): Additional details for logging

    Returns:
        Flask response: JSON error response
    """
    log_func = getattr(logger, log_level, logger.warning)
    if details:
        log_func(f"API Error ({status_code}): {message} - Details: {details}")
    else:
        log_func(f"API Error ({status_code}): {message}")

    return jsonify({'error': message}), status_code


def handle_api_exception(e, operation="operation", status_code=500):
    """
    Handle exceptions in API endpoints with consistent logging and responses.

    The exception detail goes to the log only; the client sees
    ``Failed to <operation>``.

    Args:
        e (Exception): The exception that occurred
        operation (str): Description of the operation being performed
        status_code (int): HTTP status code to return

    Returns:
        Flask response: JSON error response
    """
    logger.error(f"Exception during {operation}: {str(e)}", exc_info=e)
    return api_error(f"Failed to {operation}", status_code, 'error')


def find_dangling_references(collection=None):
    """
    Find records whose by-id reference points at a record that no longer exists.

    The store does not enforce referential integrity between collections, so
    this is the only place such rows are detected.

    Args:
        collection (str, optional): One key of ``REFERENCES``. If None, all are checked.

    Returns:
        dict: Collection name mapped to the list of offending record IDs
    """
    dangling = {}

    for name, links in REFERENCES.items():
        if collection is not None and collection != name:
            continue
        ids = set()
        for fk_column, parent in links:
            child = fk_column.class_
            # An unset optional reference is not dangling
            stmt = (
                select(child.id)
                .outerjoin(parent, fk_column == parent.id)
                .where(fk_column.is_not(None), parent.id.is_(None))
            )
            ids.update(db.session.scalars(stmt))
        if ids:
            dangling[name] = sorted(ids)

    return dangling


def int_query_arg(args, name):
    """
    Read an optional integer query-string argument.

    Returns:
        int or None: The parsed value, or None when the argument is absent or blank

    Raises:
        ValidationError: If the argument is present but not an integer
    """
    raw = args.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def reference_guard(child, fk_column, message):
    """
    Build a delete guard refusing deletion while ``child`` rows still point at the record.

    Args:
        child: Model holding the reference
        fk_column: Foreign key column on ``child``
        message (str): Error returned to the client

    Returns:
        callable: ``guard(gateway, resource_id)`` raising ValidationError when in use
    """
    def guard(gateway, resource_id):
        in_use = gateway.count(child, fk_column == resource_id)
        if in_use:
            logger.info(f"{child.__tablename__} still reference record {resource_id} ({in_use} rows)")
            raise ValidationError(message)
    return guard


def linked_records(model, field):
    """
    Build a collection resolver that links existing ``model`` rows by id.

    Args:
        model: Model of the linked rows
        field (str): Payload field named in the error message

    Returns:
        callable: ``resolve(gateway, refs)`` returning the records in payload
        order, without duplicates; raises ValidationError for an unknown id
    """
    def resolve(gateway, refs):
        records = []
        for ref in refs:
            record = gateway.find_by_id(model, ref['id'])
            if record is None:
                raise ValidationError(f"{field} references unknown id {ref['id']}")
            if record not in records:
                records.append(record)
        return records
    return resolve


def chain_guards(*guards):
    """Combine delete guards; the first one that refuses wins."""
    def guard(gateway, resource_id):
        for check in guards:
            check(gateway, resource_id)
    return guard

"""Communications blueprint: worker grievance mechanism and the complaints register."""
from flask import Blueprint
from ..models import WorkerGrievance, Complaint, ClosureEvidence
from ..base.generic_crud import GenericCRUD, register_crud_routes
from eshs_shared.validation import ValidationError
from eshs_shared.schemas import (
    WorkerGrievanceCreate, WorkerGrievanceUpdate, WorkerGrievanceRecord,
    ComplaintCreate, ComplaintUpdate, ComplaintRecord,
)

EVIDENCE_FIELD = 'photos_and_documents_proving_closure'


def closure_evidence(gateway, items):
    """Link evidence on file by id and create the entries that have none yet."""
    records = []
    for item in items:
        if item.get('id') is not None:
            record = gateway.find_by_id(ClosureEvidence, item['id'])
            if record is None:
                raise ValidationError(f"{EVIDENCE_FIELD} references unknown id {item['id']}")
        else:
            record = ClosureEvidence(photo=item['photo'], document=item['document'], created_by=item['created_by'])
        if record not in records:
            records.append(record)
    return records


def ensure_unique_number(gateway, number, current_id=None):
    criteria = [Complaint.number == number]
    if current_id is not None:
        criteria.append(Complaint.id != current_id)
    if gateway.count(Complaint, *criteria):
        raise ValidationError('A complaint and claim record with this number already exists')


def create_blueprint(gateway):
    bp = Blueprint('communications', __name__, url_prefix='/api')

    worker_grievances = GenericCRUD(
        gateway,
        model=WorkerGrievance,
        create_schema=WorkerGrievanceCreate,
        update_schema=WorkerGrievanceUpdate,
        response_schema=WorkerGrievanceRecord,
        order_by=(WorkerGrievance.created_at.desc(),),
        singular='worker grievance',
        plural='worker grievances',
    )
    register_crud_routes(bp, worker_grievances, 'worker-grievances')

    def before_create(validated_data):
        ensure_unique_number(gateway, validated_data['number'])
        return validated_data

    def before_update(validated_data, complaint):
        if 'number' in validated_data:
            ensure_unique_number(gateway, validated_data['number'], complaint.id)
        return validated_data

    complaints = GenericCRUD(
        gateway,
        model=Complaint,
        create_schema=ComplaintCreate,
        update_schema=ComplaintUpdate,
        response_schema=ComplaintRecord,
        order_by=(Complaint.created_at.desc(),),
        singular='complaint and claim record',
        plural='complaint and claim records',
        collections={'closure_evidence': closure_evidence},
        pre_create_hook=before_create,
        pre_update_hook=before_update,
    )
    register_crud_routes(bp, complaints, 'complaints-registration')

    return bp

"""Emergency blueprint: incident register."""
from flask import Blueprint
from ..models import Incident
from ..base.generic_crud import GenericCRUD, register_crud_routes
from eshs_shared.schemas import IncidentCreate, IncidentUpdate, IncidentRecord


def create_blueprint(gateway):
    bp = Blueprint('emergency', __name__, url_prefix='/api')

    incidents = GenericCRUD(
        gateway,
        model=Incident,
        create_schema=IncidentCreate,
        update_schema=IncidentUpdate,
        response_schema=IncidentRecord,
        order_by=(Incident.created_at.desc(),),
        singular='incident',
        plural='incidents',
    )
    register_crud_routes(bp, incidents, 'incidents')

    return bp

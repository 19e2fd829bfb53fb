"""Resource efficiency blueprint: waste management records."""
from flask import Blueprint
from ..models import WasteManagement
from ..base.generic_crud import GenericCRUD, register_crud_routes
from eshs_shared.schemas import WasteManagementCreate, WasteManagementUpdate, WasteManagementRecord


def create_blueprint(gateway):
    bp = Blueprint('resource_efficiency', __name__, url_prefix='/api')

    waste_management = GenericCRUD(
        gateway,
        model=WasteManagement,
        create_schema=WasteManagementCreate,
        update_schema=WasteManagementUpdate,
        response_schema=WasteManagementRecord,
        order_by=(WasteManagement.created_at.desc(),),
        singular='waste management record',
        plural='waste management records',
    )
    register_crud_routes(bp, waste_management, 'waste-management')

    return bp

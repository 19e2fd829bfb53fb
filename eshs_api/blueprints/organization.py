"""Organization blueprint: departments, positions and toolbox talks."""
from flask import Blueprint
from ..models import Department, Position, ToolboxTalk, ImpactAssessment
from ..base.generic_crud import GenericCRUD, register_crud_routes
from ..utils import reference_guard
from eshs_shared.schemas import (
    DepartmentCreate, DepartmentUpdate, DepartmentRecord,
    NamedCreate, NamedUpdate, NamedRecord,
)


def create_blueprint(gateway):
    bp = Blueprint('organization', __name__, url_prefix='/api')

    departments = GenericCRUD(
        gateway,
        model=Department,
        create_schema=DepartmentCreate,
        update_schema=DepartmentUpdate,
        response_schema=DepartmentRecord,
        order_by=(Department.name.asc(),),
        singular='department',
        plural='departments',
        delete_guard=reference_guard(
            ImpactAssessment, ImpactAssessment.department_id,
            'Cannot delete department that is in use by impact assessments'
        ),
    )
    register_crud_routes(bp, departments, 'departments')

    # Reference lists maintained from the dashboard; entries are never edited
    positions = GenericCRUD(
        gateway,
        model=Position,
        create_schema=NamedCreate,
        update_schema=NamedUpdate,
        response_schema=NamedRecord,
        order_by=(Position.name.asc(),),
        singular='position',
        plural='positions',
    )
    register_crud_routes(bp, positions, 'positions', operations=('list', 'create'))

    toolbox_talks = GenericCRUD(
        gateway,
        model=ToolboxTalk,
        create_schema=NamedCreate,
        update_schema=NamedUpdate,
        response_schema=NamedRecord,
        order_by=(ToolboxTalk.name.asc(),),
        singular='toolbox talk',
        plural='toolbox talks',
    )
    register_crud_routes(bp, toolbox_talks, 'toolbox-talks', operations=('list', 'create'))

    return bp

"""Programs blueprint: strategic objectives and the specific objectives under them."""
from flask import Blueprint
from ..models import StrategicObjective, SpecificObjective
from ..base.generic_crud import GenericCRUD, register_crud_routes
from ..utils import int_query_arg, reference_guard
from eshs_shared.schemas import (
    StrategicObjectiveCreate, StrategicObjectiveUpdate, StrategicObjectiveRecord,
    SpecificObjectiveCreate, SpecificObjectiveUpdate, SpecificObjectiveRecord,
)


def specific_objective_filter(args):
    strategic_objective_id = int_query_arg(args, 'strategicObjectiveId')
    if strategic_objective_id is None:
        return []
    return [SpecificObjective.strategic_objective_id == strategic_objective_id]


def create_blueprint(gateway):
    bp = Blueprint('programs', __name__, url_prefix='/api')

    strategic_objectives = GenericCRUD(
        gateway,
        model=StrategicObjective,
        create_schema=StrategicObjectiveCreate,
        update_schema=StrategicObjectiveUpdate,
        response_schema=StrategicObjectiveRecord,
        order_by=(StrategicObjective.created_at.desc(),),
        singular='strategic objective',
        plural='strategic objectives',
        delete_guard=reference_guard(
            SpecificObjective, SpecificObjective.strategic_objective_id,
            'Cannot delete strategic objective with associated specific objectives'
        ),
    )
    register_crud_routes(bp, strategic_objectives, 'strategic-objectives')

    specific_objectives = GenericCRUD(
        gateway,
        model=SpecificObjective,
        create_schema=SpecificObjectiveCreate,
        update_schema=SpecificObjectiveUpdate,
        response_schema=SpecificObjectiveRecord,
        order_by=(SpecificObjective.created_at.desc(),),
        singular='specific objective',
        plural='specific objectives',
        references={'strategic_objective': 'strategic_objective_id'},
        list_filter=specific_objective_filter,
    )
    register_crud_routes(bp, specific_objectives, 'specific-objectives')

    return bp

"""Training blueprint: annual training plan."""
from flask import Blueprint
from sqlalchemy import func
from ..models import TrainingPlan
from ..base.generic_crud import GenericCRUD, register_crud_routes
from ..utils import int_query_arg
from eshs_shared.schemas import TrainingPlanCreate, TrainingPlanUpdate, TrainingPlanRecord


def training_plan_filter(args):
    """Filter by exact ``year`` and by a case-insensitive ``trainingArea`` fragment."""
    criteria = []
    year = int_query_arg(args, 'year')
    if year is not None:
        criteria.append(TrainingPlan.year == year)
    area = (args.get('trainingArea') or '').strip()
    if area:
        criteria.append(func.lower(TrainingPlan.training_area).contains(area.lower(), autoescape=True))
    return criteria


def create_blueprint(gateway):
    bp = Blueprint('training', __name__, url_prefix='/api')

    training_plans = GenericCRUD(
        gateway,
        model=TrainingPlan,
        create_schema=TrainingPlanCreate,
        update_schema=TrainingPlanUpdate,
        response_schema=TrainingPlanRecord,
        order_by=(TrainingPlan.created_at.desc(),),
        singular='training plan',
        plural='training plans',
        list_filter=training_plan_filter,
    )
    register_crud_routes(bp, training_plans, 'training-plans')

    return bp

"""Risks blueprint: subprojects, screening, the legal register and impact assessments."""
from flask import Blueprint
from ..models import (
    Subproject, ScreeningForm, LegalRequirement, RiskAndImpact, EnvironmentalFactor, ImpactAssessment,
)
from ..base.generic_crud import GenericCRUD, register_crud_routes
from ..utils import int_query_arg, reference_guard, chain_guards, linked_records
from eshs_shared.validation import ValidationError
from eshs_shared.schemas import (
    SubprojectCreate, SubprojectUpdate, SubprojectRecord,
    ScreeningFormCreate, ScreeningFormUpdate, ScreeningFormRecord,
    LegalRequirementCreate, LegalRequirementUpdate, LegalRequirementRecord,
    DescribedCreate, DescribedUpdate, DescribedRecord,
    ImpactAssessmentCreate, ImpactAssessmentUpdate, ImpactAssessmentRecord,
)


def screening_filter(args):
    subproject_id = int_query_arg(args, 'subprojectId')
    if subproject_id is None:
        return []
    return [ScreeningForm.subproject_id == subproject_id]


def assessment_filter(args):
    """``?departmentId=`` and ``?subprojectId=`` narrow the assessments; both may be combined."""
    criteria = []
    department_id = int_query_arg(args, 'departmentId')
    if department_id is not None:
        criteria.append(ImpactAssessment.department_id == department_id)
    subproject_id = int_query_arg(args, 'subprojectId')
    if subproject_id is not None:
        criteria.append(ImpactAssessment.subproject_id == subproject_id)
    return criteria


def legal_requirement_guard(gateway, resource_id):
    in_use = gateway.count(
        ImpactAssessment, ImpactAssessment.legal_requirements.any(LegalRequirement.id == resource_id)
    )
    if in_use:
        raise ValidationError('Cannot delete legal requirement that is in use by impact assessments')


def create_blueprint(gateway, storage=None):
    bp = Blueprint('risks', __name__, url_prefix='/api')

    subprojects = GenericCRUD(
        gateway,
        model=Subproject,
        create_schema=SubprojectCreate,
        update_schema=SubprojectUpdate,
        response_schema=SubprojectRecord,
        order_by=(Subproject.name.asc(),),
        singular='subproject',
        plural='subprojects',
        delete_guard=chain_guards(
            reference_guard(
                ScreeningForm, ScreeningForm.subproject_id,
                'Cannot delete subproject that is in use by screening forms'
            ),
            reference_guard(
                ImpactAssessment, ImpactAssessment.subproject_id,
                'Cannot delete subproject that is in use by impact assessments'
            ),
        ),
    )
    register_crud_routes(bp, subprojects, 'subprojects')

    screening_forms = GenericCRUD(
        gateway,
        model=ScreeningForm,
        create_schema=ScreeningFormCreate,
        update_schema=ScreeningFormUpdate,
        response_schema=ScreeningFormRecord,
        order_by=(ScreeningForm.created_at.desc(),),
        singular='screening form',
        plural='screening forms',
        references={'subproject': 'subproject_id'},
        list_filter=screening_filter,
    )
    register_crud_routes(bp, screening_forms, 'screening-forms')

    legal_requirements = GenericCRUD(
        gateway,
        model=LegalRequirement,
        create_schema=LegalRequirementCreate,
        update_schema=LegalRequirementUpdate,
        response_schema=LegalRequirementRecord,
        order_by=(LegalRequirement.number.asc(),),
        singular='legal requirement',
        plural='legal requirements',
        delete_guard=legal_requirement_guard,
        storage=storage,
        attachment_fields=('law_file',),
    )
    register_crud_routes(bp, legal_requirements, 'risks/legal-requirements')

    risks_and_impacts = GenericCRUD(
        gateway,
        model=RiskAndImpact,
        create_schema=DescribedCreate,
        update_schema=DescribedUpdate,
        response_schema=DescribedRecord,
        order_by=(RiskAndImpact.description.asc(),),
        singular='risk and impact',
        plural='risks and impacts',
        delete_guard=reference_guard(
            ImpactAssessment, ImpactAssessment.risks_and_impact_id,
            'Cannot delete risk and impact that is in use by impact assessments'
        ),
    )
    register_crud_routes(bp, risks_and_impacts, 'risks-and-impacts')

    environmental_factors = GenericCRUD(
        gateway,
        model=EnvironmentalFactor,
        create_schema=DescribedCreate,
        update_schema=DescribedUpdate,
        response_schema=DescribedRecord,
        order_by=(EnvironmentalFactor.description.asc(),),
        singular='environmental factor',
        plural='environmental factors',
        delete_guard=reference_guard(
            ImpactAssessment, ImpactAssessment.environmental_factor_id,
            'Cannot delete environmental factor that is in use by impact assessments'
        ),
    )
    register_crud_routes(bp, environmental_factors, 'environmental-factors')

    impact_assessments = GenericCRUD(
        gateway,
        model=ImpactAssessment,
        create_schema=ImpactAssessmentCreate,
        update_schema=ImpactAssessmentUpdate,
        response_schema=ImpactAssessmentRecord,
        order_by=(ImpactAssessment.created_at.desc(),),
        singular='impact assessment',
        plural='impact assessments',
        references={
            'department': 'department_id',
            'subproject': 'subproject_id',
            'risks_and_impact': 'risks_and_impact_id',
            'environmental_factor': 'environmental_factor_id',
        },
        collections={'legal_requirements': linked_records(LegalRequirement, 'legal_requirements')},
        list_filter=assessment_filter,
    )
    register_crud_routes(bp, impact_assessments, 'risks/impact-assessments')
    # Single assessments are also addressed outside the risks/ prefix
    register_crud_routes(bp, impact_assessments, 'impact-assessments', operations=('detail', 'update', 'delete'))

    return bp

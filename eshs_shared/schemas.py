"""Pydantic schemas for validation and serialization.

Every resource has three schemas:

- ``<Name>Create`` declares which fields are required and their types,
- ``<Name>Update`` accepts any subset of the same fields (partial update),
- ``<Name>Record`` reshapes a stored row into the JSON the dashboard expects.

Records come in two shapes. "Raw" records mirror the stored row with camelCase
keys (``createdAt``); "reshaped" records use snake_case keys (``created_at``)
and may rename, flatten or nest fields.
"""
from datetime import datetime, timezone
from typing import Optional, List, Annotated
from pydantic import (
    BaseModel, Field, ConfigDict, AliasChoices, AliasGenerator, AfterValidator,
    PlainSerializer, field_validator, model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
from eshs_shared.enums import (
    LegalRequirementStatus, TrainingType, TrainingStatus, TrainingMonth, LifeCycleStage, ImpactStatute,
    ImpactExtension, ImpactDuration, ImpactIntensity, ImpactProbability,
)
from eshs_shared.validation import sanitize_html


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an incoming datetime to the naive UTC form the store keeps."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def format_timestamp(value: datetime) -> str:
    """Render a stored datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    value = to_naive_utc(value)
    return value.strftime('%Y-%m-%dT%H:%M:%S.') + f'{value.microsecond // 1000:03d}Z'


def require_value(value):
    """Reject null and blank values before type validation runs."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError('missing', 'Field required')
    return value


def sanitized(*fields):
    """Validator that runs bleach over the named free-text fields.

    Cleaning happens before the length and blankness checks, so markup that
    strips down to nothing is rejected like an empty value.
    """
    def clean(cls, value):
        return sanitize_html(value) if isinstance(value, str) else value
    return field_validator(*fields, mode='before')(clean)


InputDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]
Timestamp = Annotated[datetime, PlainSerializer(format_timestamp, return_type=str)]
RequiredText = Annotated[str, Field(min_length=1)]


class RecordInput(BaseModel):
    """Base for create/update payloads.

    Unknown keys (including client-supplied ``id`` and timestamps) are dropped.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra='ignore')


class CamelRecordInput(RecordInput):
    """Payload whose keys arrive camelCase (snake_case is accepted too)."""
    model_config = ConfigDict(
        str_strip_whitespace=True, extra='ignore',
        alias_generator=AliasGenerator(validation_alias=to_camel), populate_by_name=True
    )


class RecordRef(BaseModel):
    """By-identifier reference to another record: ``{"id": 3}``."""
    model_config = ConfigDict(extra='ignore')

    id: int = Field(..., gt=0)


class RawRecord(BaseModel):
    """Stored row with camelCase keys."""
    model_config = ConfigDict(
        from_attributes=True, alias_generator=AliasGenerator(serialization_alias=to_camel)
    )

    id: int
    created_at: Timestamp
    updated_at: Timestamp


class ReshapedRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: int
    created_at: Timestamp
    updated_at: Timestamp


# Department Schemas
class DepartmentCreate(RecordInput):
    name: RequiredText = Field(..., max_length=200)
    description: RequiredText

    clean_text = sanitized('description')


class DepartmentUpdate(RecordInput):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)

    clean_text = sanitized('description')


class DepartmentRecord(RawRecord):
    name: str
    description: str


# Position and toolbox talk schemas (name-only reference data)
class NamedCreate(RecordInput):
    name: RequiredText = Field(..., max_length=200)


class NamedUpdate(RecordInput):
    name: Optional[str] = Field(None, min_length=1, max_length=200)


class NamedRecord(RawRecord):
    name: str


# Incident Schemas
class IncidentCreate(RecordInput):
    description: RequiredText

    clean_text = sanitized('description')


class IncidentUpdate(RecordInput):
    description: Optional[str] = Field(None, min_length=1)

    clean_text = sanitized('description')


class IncidentRecord(ReshapedRecord):
    description: str


# Document Type Schemas
class DocumentTypeCreate(RecordInput):
    description: RequiredText = Field(..., max_length=200)


class DocumentTypeUpdate(RecordInput):
    description: Optional[str] = Field(None, min_length=1, max_length=200)


class DocumentTypeRecord(ReshapedRecord):
    description: str


# Document Schemas
class DocumentCreate(RecordInput):
    code: RequiredText = Field(..., max_length=100)
    document_name: RequiredText = Field(..., max_length=300)
    document_type: RecordRef
    document_state: RequiredText = Field(..., max_length=100)
    disposal_method: RequiredText = Field(..., max_length=200)
    creation_date: Optional[InputDateTime] = None
    revision_date: Optional[InputDateTime] = None
    retention_period: Optional[InputDateTime] = None
    document_path: Optional[str] = Field(default="", max_length=1000)
    observation: Optional[str] = ""

    clean_text = sanitized('observation')


class DocumentUpdate(RecordInput):
    code: Optional[str] = Field(None, min_length=1, max_length=100)
    document_name: Optional[str] = Field(None, min_length=1, max_length=300)
    document_type: Optional[RecordRef] = None
    document_state: Optional[str] = Field(None, min_length=1, max_length=100)
    disposal_method: Optional[str] = Field(None, min_length=1, max_length=200)
    creation_date: Optional[InputDateTime] = None
    revision_date: Optional[InputDateTime] = None
    retention_period: Optional[InputDateTime] = None
    document_path: Optional[str] = Field(None, max_length=1000)
    observation: Optional[str] = None

    clean_text = sanitized('observation')


class DocumentTypeRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str


class DocumentRecord(ReshapedRecord):
    code: str
    creation_date: Optional[Timestamp] = None
    revision_date: Optional[Timestamp] = None
    document_name: str
    document_type: Optional[DocumentTypeRef] = None
    document_path: Optional[str] = None
    document_state: str
    retention_period: Optional[Timestamp] = None
    disposal_method: str
    observation: Optional[str] = None


# Subproject Schemas
class SubprojectCreate(CamelRecordInput):
    name: RequiredText = Field(..., max_length=200)
    contract_reference: Optional[str] = Field(None, max_length=200)
    contractor_name: Optional[str] = Field(None, max_length=200)
    estimated_cost: Optional[float] = Field(None, ge=0)
    location: RequiredText = Field(..., max_length=300)
    geographic_coordinates: Optional[str] = Field(None, max_length=200)
    type: RequiredText = Field(..., max_length=100)
    approximate_area: RequiredText = Field(..., max_length=100)

    @field_validator('estimated_cost', mode='before')
    @classmethod
    def blank_cost_is_unknown(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SubprojectUpdate(CamelRecordInput):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    contract_reference: Optional[str] = Field(None, max_length=200)
    contractor_name: Optional[str] = Field(None, max_length=200)
    estimated_cost: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, min_length=1, max_length=300)
    geographic_coordinates: Optional[str] = Field(None, max_length=200)
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    approximate_area: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator('estimated_cost', mode='before')
    @classmethod
    def blank_cost_is_unknown(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SubprojectRecord(RawRecord):
    name: str
    contract_reference: Optional[str] = None
    contractor_name: Optional[str] = None
    estimated_cost: Optional[float] = None
    location: str
    geographic_coordinates: Optional[str] = None
    type: str
    approximate_area: str


# Screening Form Schemas
class ScreeningFormCreate(RecordInput):
    subproject: RecordRef
    responsible_for_filling_form: RequiredText = Field(..., max_length=200)
    responsible_for_verification: Optional[str] = Field(default="", max_length=200)
    response: Optional[str] = Field(default="", max_length=20)
    comment: Optional[str] = ""
    relevant_standard: Optional[str] = ""
    consultation_and_engagement: Optional[str] = ""
    recommended_actions: Optional[str] = Field(
        default="", validation_alias=AliasChoices('recomended_actions', 'recommended_actions')
    )
    risk_category: Optional[str] = Field(default="", max_length=50)

    clean_text = sanitized('comment', 'relevant_standard', 'consultation_and_engagement', 'recommended_actions')


class ScreeningFormUpdate(RecordInput):
    subproject: Optional[RecordRef] = None
    responsible_for_filling_form: Optional[str] = Field(None, min_length=1, max_length=200)
    responsible_for_verification: Optional[str] = Field(None, max_length=200)
    response: Optional[str] = Field(None, max_length=20)
    comment: Optional[str] = None
    relevant_standard: Optional[str] = None
    consultation_and_engagement: Optional[str] = None
    recommended_actions: Optional[str] = Field(
        None, validation_alias=AliasChoices('recomended_actions', 'recommended_actions')
    )
    risk_category: Optional[str] = Field(None, max_length=50)

    clean_text = sanitized('comment', 'relevant_standard', 'consultation_and_engagement', 'recommended_actions')


class SubprojectRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class ScreeningFormRecord(ReshapedRecord):
    subproject: Optional[SubprojectRef] = None
    responsible_for_filling_form: str
    responsible_for_verification: Optional[str] = None
    response: Optional[str] = None
    comment: Optional[str] = None
    relevant_standard: Optional[str] = None
    consultation_and_engagement: Optional[str] = None
    # The dashboard reads this key with its historical spelling
    recomended_actions: Optional[str] = Field(None, validation_alias='recommended_actions')
    risk_category: Optional[str] = None


# Legal Requirement Schemas
def normalize_legal_status(value):
    """Case-insensitive status; anything unrecognized falls back to ACTIVE."""
    if isinstance(value, LegalRequirementStatus):
        return value
    require_value(value)
    try:
        return LegalRequirementStatus(str(value).strip().upper())
    except ValueError:
        return LegalRequirementStatus.ACTIVE


class LegalRequirementCreate(CamelRecordInput):
    number: RequiredText = Field(..., max_length=50)
    document_title: RequiredText = Field(..., max_length=300)
    effective_date: InputDateTime
    description: RequiredText
    status: LegalRequirementStatus
    amended_description: Optional[str] = None
    observation: Optional[str] = None
    law_file: Optional[str] = Field(None, max_length=1000)

    clean_text = sanitized('description', 'amended_description', 'observation')

    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, v):
        return normalize_legal_status(v)


class LegalRequirementUpdate(CamelRecordInput):
    number: Optional[str] = Field(None, min_length=1, max_length=50)
    document_title: Optional[str] = Field(None, min_length=1, max_length=300)
    effective_date: Optional[InputDateTime] = None
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[LegalRequirementStatus] = None
    amended_description: Optional[str] = None
    observation: Optional[str] = None
    law_file: Optional[str] = Field(None, max_length=1000)

    clean_text = sanitized('description', 'amended_description', 'observation')

    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, v):
        if v is None:
            return v
        return normalize_legal_status(v)


class LegalRequirementRecord(ReshapedRecord):
    number: str
    document_title: str
    effective_date: Timestamp
    description: str
    status: str
    amended_description: Optional[str] = None
    observation: Optional[str] = None
    law_file: Optional[str] = None

    @field_validator('status', mode='before')
    @classmethod
    def lower_case_status(cls, v):
        if isinstance(v, LegalRequirementStatus):
            v = v.value
        return str(v).lower()


# Risk and impact / environmental factor schemas (description-only reference data)
class DescribedCreate(RecordInput):
    description: RequiredText = Field(..., max_length=300)


class DescribedUpdate(RecordInput):
    description: Optional[str] = Field(None, min_length=1, max_length=300)


class DescribedRecord(RawRecord):
    description: str


# Impact Assessment Schemas
class ImpactAssessmentCreate(RecordInput):
    # The dashboard spells this key "departament"
    department: Optional[RecordRef] = Field(None, validation_alias=AliasChoices('departament', 'department'))
    subproject: Optional[RecordRef] = None
    activity: RequiredText
    risks_and_impact: RecordRef
    environmental_factor: RecordRef
    life_cycle: LifeCycleStage
    statute: ImpactStatute
    extension: ImpactExtension
    duration: ImpactDuration
    intensity: ImpactIntensity
    probability: ImpactProbability
    significance: Optional[str] = Field(None, max_length=100)
    description_of_measures: RequiredText
    deadline: InputDateTime
    responsible: Optional[str] = Field(None, max_length=200)
    effectiveness_assessment: Optional[str] = ""
    legal_requirements: List[RecordRef] = []
    compliance_requirements: Optional[str] = ""
    observations: Optional[str] = ""

    clean_text = sanitized(
        'activity', 'description_of_measures', 'effectiveness_assessment', 'compliance_requirements', 'observations'
    )


class ImpactAssessmentUpdate(RecordInput):
    department: Optional[RecordRef] = Field(None, validation_alias=AliasChoices('departament', 'department'))
    subproject: Optional[RecordRef] = None
    activity: Optional[str] = Field(None, min_length=1)
    risks_and_impact: Optional[RecordRef] = None
    environmental_factor: Optional[RecordRef] = None
    life_cycle: Optional[LifeCycleStage] = None
    statute: Optional[ImpactStatute] = None
    extension: Optional[ImpactExtension] = None
    duration: Optional[ImpactDuration] = None
    intensity: Optional[ImpactIntensity] = None
    probability: Optional[ImpactProbability] = None
    significance: Optional[str] = Field(None, max_length=100)
    description_of_measures: Optional[str] = Field(None, min_length=1)
    deadline: Optional[InputDateTime] = None
    responsible: Optional[str] = Field(None, max_length=200)
    effectiveness_assessment: Optional[str] = None
    legal_requirements: Optional[List[RecordRef]] = None
    compliance_requirements: Optional[str] = None
    observations: Optional[str] = None

    clean_text = sanitized(
        'activity', 'description_of_measures', 'effectiveness_assessment', 'compliance_requirements', 'observations'
    )


class DepartmentRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class DescriptionRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str


class LegalRequirementRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    number: str
    document_title: str


class ImpactAssessmentRecord(ReshapedRecord):
    departament: Optional[DepartmentRef] = Field(None, validation_alias='department')
    subproject: Optional[SubprojectRef] = None
    activity: str
    risks_and_impact: Optional[DescriptionRef] = None
    environmental_factor: Optional[DescriptionRef] = None
    life_cycle: LifeCycleStage
    statute: ImpactStatute
    extension: ImpactExtension
    duration: ImpactDuration
    intensity: ImpactIntensity
    probability: ImpactProbability
    significance: Optional[str] = None
    description_of_measures: str
    deadline: Timestamp
    responsible: Optional[str] = None
    effectiveness_assessment: Optional[str] = None
    legal_requirements: List[LegalRequirementRef] = []
    compliance_requirements: Optional[str] = None
    observations: Optional[str] = None


# Strategic Objective Schemas
class StrategicObjectiveCreate(RecordInput):
    description: RequiredText
    goals: RequiredText
    strategies_for_achievement: RequiredText

    clean_text = sanitized('description', 'goals', 'strategies_for_achievement')


class StrategicObjectiveUpdate(RecordInput):
    description: Optional[str] = Field(None, min_length=1)
    goals: Optional[str] = Field(None, min_length=1)
    strategies_for_achievement: Optional[str] = Field(None, min_length=1)

    clean_text = sanitized('description', 'goals', 'strategies_for_achievement')


class SpecificObjectiveSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    specific_objective: str


class StrategicObjectiveRecord(ReshapedRecord):
    description: str
    goals: str
    strategies_for_achievement: str
    specific_objectives: List[SpecificObjectiveSummary] = []


# Specific Objective Schemas
class SpecificObjectiveCreate(RecordInput):
    strategic_objective: RecordRef
    specific_objective: RequiredText
    actions_for_achievement: RequiredText
    responsible_person: RequiredText = Field(..., max_length=200)
    necessary_resources: RequiredText
    indicator: RequiredText = Field(..., max_length=300)
    goal: RequiredText = Field(..., max_length=300)
    monitoring_frequency: RequiredText = Field(..., max_length=100)
    deadline: InputDateTime
    observation: Optional[str] = ""

    clean_text = sanitized('specific_objective', 'actions_for_achievement', 'necessary_resources', 'observation')


class SpecificObjectiveUpdate(RecordInput):
    strategic_objective: Optional[RecordRef] = None
    specific_objective: Optional[str] = Field(None, min_length=1)
    actions_for_achievement: Optional[str] = Field(None, min_length=1)
    responsible_person: Optional[str] = Field(None, min_length=1, max_length=200)
    necessary_resources: Optional[str] = Field(None, min_length=1)
    indicator: Optional[str] = Field(None, min_length=1, max_length=300)
    goal: Optional[str] = Field(None, min_length=1, max_length=300)
    monitoring_frequency: Optional[str] = Field(None, min_length=1, max_length=100)
    deadline: Optional[InputDateTime] = None
    observation: Optional[str] = None

    clean_text = sanitized('specific_objective', 'actions_for_achievement', 'necessary_resources', 'observation')


class SpecificObjectiveRecord(ReshapedRecord):
    strategic_objective: Optional[str] = None
    specific_objective: str
    actions_for_achievement: str
    responsible_person: str
    necessary_resources: str
    indicator: str
    goal: str
    monitoring_frequency: str
    deadline: Timestamp
    observation: Optional[str] = None

    @field_validator('strategic_objective', mode='before')
    @classmethod
    def flatten_strategic_objective(cls, v):
        # Reported by description, not by id
        return getattr(v, 'description', v)


# Training Plan Schemas
class TrainingPlanCreate(RecordInput):
    updated_by: RequiredText = Field(..., max_length=200)
    date: InputDateTime
    year: int = Field(..., ge=1900, le=2200)
    training_area: RequiredText = Field(..., max_length=200)
    training_title: RequiredText = Field(..., max_length=300)
    training_objective: RequiredText
    training_type: TrainingType
    training_entity: RequiredText = Field(..., max_length=200)
    duration: RequiredText = Field(..., max_length=100)
    number_of_trainees: int = Field(..., gt=0)
    training_recipients: RequiredText
    training_month: TrainingMonth
    training_status: TrainingStatus
    observations: Optional[str] = ""

    clean_text = sanitized('training_objective', 'training_recipients', 'observations')


class TrainingPlanUpdate(RecordInput):
    updated_by: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[InputDateTime] = None
    year: Optional[int] = Field(None, ge=1900, le=2200)
    training_area: Optional[str] = Field(None, min_length=1, max_length=200)
    training_title: Optional[str] = Field(None, min_length=1, max_length=300)
    training_objective: Optional[str] = Field(None, min_length=1)
    training_type: Optional[TrainingType] = None
    training_entity: Optional[str] = Field(None, min_length=1, max_length=200)
    duration: Optional[str] = Field(None, min_length=1, max_length=100)
    number_of_trainees: Optional[int] = Field(None, gt=0)
    training_recipients: Optional[str] = Field(None, min_length=1)
    training_month: Optional[TrainingMonth] = None
    training_status: Optional[TrainingStatus] = None
    observations: Optional[str] = None

    clean_text = sanitized('training_objective', 'training_recipients', 'observations')


class TrainingPlanRecord(ReshapedRecord):
    updated_by: str
    date: Timestamp
    year: int
    training_area: str
    training_title: str
    training_objective: str
    training_type: TrainingType
    training_entity: str
    duration: str
    number_of_trainees: int
    training_recipients: str
    training_month: TrainingMonth
    training_status: TrainingStatus
    observations: Optional[str] = None


# Waste Management Schemas
class WasteManagementCreate(RecordInput):
    waste_route: RequiredText = Field(..., max_length=300)
    labelling: RequiredText = Field(..., max_length=300)
    storage: RequiredText = Field(..., max_length=300)
    transportation_company_method: RequiredText = Field(..., max_length=300)
    disposal_company: RequiredText = Field(..., max_length=300)
    special_instructions: Optional[str] = ""

    clean_text = sanitized('special_instructions')


class WasteManagementUpdate(RecordInput):
    waste_route: Optional[str] = Field(None, min_length=1, max_length=300)
    labelling: Optional[str] = Field(None, min_length=1, max_length=300)
    storage: Optional[str] = Field(None, min_length=1, max_length=300)
    transportation_company_method: Optional[str] = Field(None, min_length=1, max_length=300)
    disposal_company: Optional[str] = Field(None, min_length=1, max_length=300)
    special_instructions: Optional[str] = None

    clean_text = sanitized('special_instructions')


class WasteManagementRecord(ReshapedRecord):
    waste_route: str
    labelling: str
    storage: str
    transportation_company_method: str
    disposal_company: str
    special_instructions: Optional[str] = None


# Worker Grievance Schemas
class WorkerGrievanceCreate(RecordInput):
    name: RequiredText = Field(..., max_length=200)
    company: RequiredText = Field(..., max_length=200)
    date: InputDateTime
    prefered_contact_method: RequiredText = Field(..., max_length=100)
    contact: RequiredText = Field(..., max_length=200)
    prefered_language: RequiredText = Field(..., max_length=100)
    other_language: Optional[str] = Field(None, max_length=100)
    grievance_details: RequiredText
    name_of_person_acknowledging_grievance: Optional[str] = Field(None, max_length=200)
    position_of_person_acknowledging_grievance: Optional[str] = Field(None, max_length=200)
    date_of_acknowledgement: Optional[InputDateTime] = None
    follow_up_details: Optional[str] = None
    closed_out_date: Optional[InputDateTime] = None

    clean_text = sanitized('grievance_details', 'follow_up_details')


class WorkerGrievanceUpdate(RecordInput):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    company: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[InputDateTime] = None
    prefered_contact_method: Optional[str] = Field(None, min_length=1, max_length=100)
    contact: Optional[str] = Field(None, min_length=1, max_length=200)
    prefered_language: Optional[str] = Field(None, min_length=1, max_length=100)
    other_language: Optional[str] = Field(None, max_length=100)
    grievance_details: Optional[str] = Field(None, min_length=1)
    name_of_person_acknowledging_grievance: Optional[str] = Field(None, max_length=200)
    position_of_person_acknowledging_grievance: Optional[str] = Field(None, max_length=200)
    date_of_acknowledgement: Optional[InputDateTime] = None
    follow_up_details: Optional[str] = None
    closed_out_date: Optional[InputDateTime] = None

    clean_text = sanitized('grievance_details', 'follow_up_details')


class WorkerGrievanceRecord(ReshapedRecord):
    name: str
    company: str
    date: Timestamp
    prefered_contact_method: str
    contact: str
    prefered_language: str
    other_language: Optional[str] = None
    grievance_details: str
    name_of_person_acknowledging_grievance: Optional[str] = None
    position_of_person_acknowledging_grievance: Optional[str] = None
    date_of_acknowledgement: Optional[Timestamp] = None
    follow_up_details: Optional[str] = None
    closed_out_date: Optional[Timestamp] = None




# Complaint Schemas
class ClosureEvidenceInput(BaseModel):
    """One entry of a complaint's closure evidence.

    ``{"id": n}`` links evidence already on file; anything else creates a new
    entry from ``photo``, ``document`` and ``createdBy`` (attachment URLs and author).
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra='ignore')

    id: Optional[int] = Field(None, gt=0)
    photo: Optional[str] = Field(None, max_length=1000)
    document: Optional[str] = Field(None, max_length=1000)
    created_by: Optional[str] = Field(None, max_length=200, validation_alias=AliasChoices('createdBy', 'created_by'))

    @model_validator(mode='after')
    def new_evidence_is_complete(self):
        if self.id is None and not (self.photo and self.document and self.created_by):
            raise ValueError('photo, document and createdBy are required for new closure evidence')
        return self


def no_resources_spent(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    return value


COMPLAINT_FREE_TEXT = (
    'how_occurred', 'who_involved', 'report_and_explanation', 'action_taken', 'collected_information',
    'corrective_action_taken', 'involved_in_resolution', 'monitoring_method_and_frequency', 'follow_up',
    'involved_institutions', 'suggested_preventive_actions',
)

EVIDENCE_ALIASES = AliasChoices('photos_and_documents_proving_closure', 'closure_evidence')


class ComplaintCreate(RecordInput):
    number: RequiredText = Field(..., max_length=50)
    date_occurred: InputDateTime
    local_occurrence: RequiredText = Field(..., max_length=300)
    how_occurred: RequiredText
    who_involved: RequiredText
    report_and_explanation: RequiredText
    claim_local_occurrence: RequiredText = Field(..., max_length=300)
    complaintant_gender: RequiredText = Field(..., max_length=50)
    complaintant_age: RequiredText = Field(..., max_length=50)
    anonymous_complaint: RequiredText = Field(..., max_length=50)
    telephone: RequiredText = Field(..., max_length=100)
    email: Optional[str] = Field(None, max_length=200)
    complaintant_address: RequiredText = Field(..., max_length=300)
    complaintant_accepted: RequiredText = Field(..., max_length=50)
    action_taken: RequiredText
    complaintant_notified: Optional[str] = Field(None, max_length=50)
    notification_method: RequiredText = Field(..., max_length=100)
    closing_date: InputDateTime
    claim_category: RequiredText = Field(..., max_length=100)
    other_claim_category: Optional[str] = Field("", max_length=200)
    inspection_date: InputDateTime
    collected_information: RequiredText
    resolution_type: RequiredText = Field(..., max_length=100)
    resolution_date: InputDateTime
    resolution_submitted: RequiredText = Field(..., max_length=50)
    corrective_action_taken: RequiredText
    involved_in_resolution: RequiredText
    complaintant_satisfaction: RequiredText = Field(..., max_length=100)
    closure_evidence: List[ClosureEvidenceInput] = Field([], validation_alias=EVIDENCE_ALIASES)
    resources_spent: float = Field(0, ge=0)
    number_of_days_since_received_to_closure: int = Field(..., ge=0)
    monitoring_after_closure: RequiredText = Field(..., max_length=100)
    monitoring_method_and_frequency: RequiredText
    follow_up: RequiredText
    involved_institutions: Optional[str] = None
    suggested_preventive_actions: RequiredText

    clean_text = sanitized(*COMPLAINT_FREE_TEXT)

    @field_validator('resources_spent', mode='before')
    @classmethod
    def blank_resources(cls, v):
        return no_resources_spent(v)


class ComplaintUpdate(RecordInput):
    number: Optional[str] = Field(None, min_length=1, max_length=50)
    date_occurred: Optional[InputDateTime] = None
    local_occurrence: Optional[str] = Field(None, min_length=1, max_length=300)
    how_occurred: Optional[str] = Field(None, min_length=1)
    who_involved: Optional[str] = Field(None, min_length=1)
    report_and_explanation: Optional[str] = Field(None, min_length=1)
    claim_local_occurrence: Optional[str] = Field(None, min_length=1, max_length=300)
    complaintant_gender: Optional[str] = Field(None, min_length=1, max_length=50)
    complaintant_age: Optional[str] = Field(None, min_length=1, max_length=50)
    anonymous_complaint: Optional[str] = Field(None, min_length=1, max_length=50)
    telephone: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=200)
    complaintant_address: Optional[str] = Field(None, min_length=1, max_length=300)
    complaintant_accepted: Optional[str] = Field(None, min_length=1, max_length=50)
    action_taken: Optional[str] = Field(None, min_length=1)
    complaintant_notified: Optional[str] = Field(None, max_length=50)
    notification_method: Optional[str] = Field(None, min_length=1, max_length=100)
    closing_date: Optional[InputDateTime] = None
    claim_category: Optional[str] = Field(None, min_length=1, max_length=100)
    other_claim_category: Optional[str] = Field(None, max_length=200)
    inspection_date: Optional[InputDateTime] = None
    collected_information: Optional[str] = Field(None, min_length=1)
    resolution_type: Optional[str] = Field(None, min_length=1, max_length=100)
    resolution_date: Optional[InputDateTime] = None
    resolution_submitted: Optional[str] = Field(None, min_length=1, max_length=50)
    corrective_action_taken: Optional[str] = Field(None, min_length=1)
    involved_in_resolution: Optional[str] = Field(None, min_length=1)
    complaintant_satisfaction: Optional[str] = Field(None, min_length=1, max_length=100)
    closure_evidence: Optional[List[ClosureEvidenceInput]] = Field(None, validation_alias=EVIDENCE_ALIASES)
    resources_spent: Optional[float] = Field(None, ge=0)
    number_of_days_since_received_to_closure: Optional[int] = Field(None, ge=0)
    monitoring_after_closure: Optional[str] = Field(None, min_length=1, max_length=100)
    monitoring_method_and_frequency: Optional[str] = Field(None, min_length=1)
    follow_up: Optional[str] = Field(None, min_length=1)
    involved_institutions: Optional[str] = None
    suggested_preventive_actions: Optional[str] = Field(None, min_length=1)

    clean_text = sanitized(*COMPLAINT_FREE_TEXT)

    @field_validator('resources_spent', mode='before')
    @classmethod
    def blank_resources(cls, v):
        return no_resources_spent(v)


class ClosureEvidenceRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    photo: str
    document: str
    created_by: str = Field(serialization_alias='createdBy')
    created_at: Timestamp
    updated_at: Timestamp


class ComplaintRecord(ReshapedRecord):
    number: str
    date_occurred: Timestamp
    local_occurrence: str
    how_occurred: str
    who_involved: str
    report_and_explanation: str
    registered_date: Timestamp
    claim_local_occurrence: str
    complaintant_gender: str
    complaintant_age: str
    anonymous_complaint: str
    telephone: str
    email: Optional[str] = None
    complaintant_address: str
    complaintant_accepted: str
    action_taken: str
    complaintant_notified: Optional[str] = None
    notification_method: str
    closing_date: Timestamp
    claim_category: str
    other_claim_category: Optional[str] = None
    inspection_date: Timestamp
    collected_information: str
    resolution_type: str
    resolution_date: Timestamp
    resolution_submitted: str
    corrective_action_taken: str
    involved_in_resolution: str
    complaintant_satisfaction: str
    photos_and_documents_proving_closure: List[ClosureEvidenceRecord] = Field(
        [], validation_alias='closure_evidence'
    )
    resources_spent: float
    number_of_days_since_received_to_closure: int
    monitoring_after_closure: str
    monitoring_method_and_frequency: str
    follow_up: str
    involved_institutions: Optional[str] = None
    suggested_preventive_actions: str


# Upload Schemas
class PresignedUploadRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra='ignore')

    file_name: RequiredText = Field(..., max_length=500, alias='fileName')
    content_type: RequiredText = Field(..., max_length=200, alias='contentType')

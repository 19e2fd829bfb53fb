from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey, Index, Enum, Table
from sqlalchemy.orm import relationship, declarative_base
from eshs_shared.enums import (
    LegalRequirementStatus, TrainingType, TrainingStatus, TrainingMonth, LifeCycleStage, ImpactStatute,
    ImpactExtension, ImpactDuration, ImpactIntensity, ImpactProbability,
)

Base = declarative_base()


def now():
    """Return the current time as a naive UTC datetime.

    SQLite drops tzinfo on storage, so every timestamp is kept naive and treated
    as UTC everywhere (serialization appends the ``Z`` suffix).
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


class RecordMixin:
    """Identifier and bookkeeping timestamps shared by every record type."""

    id = Column(Integer, primary_key=True, nullable=False)
    created_at = Column(DateTime, default=now, nullable=False)
    updated_at = Column(DateTime, default=now, onupdate=now, nullable=False)


# Organization

class Department(Base, RecordMixin):
    __tablename__ = 'departments'
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)


class Position(Base, RecordMixin):
    __tablename__ = 'positions'
    name = Column(String(200), nullable=False)


class ToolboxTalk(Base, RecordMixin):
    __tablename__ = 'toolbox_talks'
    name = Column(String(200), nullable=False)


# Emergency

class Incident(Base, RecordMixin):
    __tablename__ = 'incidents'
    description = Column(Text, nullable=False)


# Documents

class DocumentType(Base, RecordMixin):
    __tablename__ = 'document_types'
    description = Column(String(200), nullable=False)


class Document(Base, RecordMixin):
    __tablename__ = 'documents'
    code = Column(String(100), nullable=False)
    document_name = Column(String(300), nullable=False)
    document_type_id = Column(Integer, ForeignKey('document_types.id'), nullable=False)
    document_state = Column(String(100), nullable=False)
    disposal_method = Column(String(200), nullable=False)
    creation_date = Column(DateTime)
    revision_date = Column(DateTime)
    retention_period = Column(DateTime)
    document_path = Column(String(1000), default="")
    observation = Column(Text, default="")
    document_type = relationship('DocumentType', lazy='joined')

Index('idx_document_type_id', Document.document_type_id)


# Risks

class Subproject(Base, RecordMixin):
    __tablename__ = 'subprojects'
    name = Column(String(200), nullable=False)
    contract_reference = Column(String(200))
    contractor_name = Column(String(200))
    estimated_cost = Column(Float)
    location = Column(String(300), nullable=False)
    geographic_coordinates = Column(String(200))
    type = Column(String(100), nullable=False)
    approximate_area = Column(String(100), nullable=False)


class ScreeningForm(Base, RecordMixin):
    __tablename__ = 'screening_forms'
    subproject_id = Column(Integer, ForeignKey('subprojects.id'), nullable=False)
    responsible_for_filling_form = Column(String(200), nullable=False)
    responsible_for_verification = Column(String(200), default="")
    response = Column(String(20), default="")
    comment = Column(Text, default="")
    relevant_standard = Column(Text, default="")
    consultation_and_engagement = Column(Text, default="")
    recommended_actions = Column(Text, default="")
    risk_category = Column(String(50), default="")
    subproject = relationship('Subproject', lazy='joined')

Index('idx_screening_subproject_id', ScreeningForm.subproject_id)


class LegalRequirement(Base, RecordMixin):
    __tablename__ = 'legal_requirements'
    number = Column(String(50), nullable=False)
    document_title = Column(String(300), nullable=False)
    effective_date = Column(DateTime, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(Enum(LegalRequirementStatus), default=LegalRequirementStatus.ACTIVE, nullable=False)
    amended_description = Column(Text)
    observation = Column(Text)
    law_file = Column(String(1000))


class RiskAndImpact(Base, RecordMixin):
    __tablename__ = 'risks_and_impacts'
    description = Column(String(300), nullable=False)


class EnvironmentalFactor(Base, RecordMixin):
    __tablename__ = 'environmental_factors'
    description = Column(String(300), nullable=False)


impact_assessment_legal_requirements = Table(
    'impact_assessment_legal_requirements', Base.metadata,
    Column('impact_assessment_id', Integer, ForeignKey('impact_assessments.id'), primary_key=True),
    Column('legal_requirement_id', Integer, ForeignKey('legal_requirements.id'), primary_key=True),
)


class ImpactAssessment(Base, RecordMixin):
    __tablename__ = 'impact_assessments'
    department_id = Column(Integer, ForeignKey('departments.id'))
    subproject_id = Column(Integer, ForeignKey('subprojects.id'))
    activity = Column(Text, nullable=False)
    risks_and_impact_id = Column(Integer, ForeignKey('risks_and_impacts.id'), nullable=False)
    environmental_factor_id = Column(Integer, ForeignKey('environmental_factors.id'), nullable=False)
    life_cycle = Column(Enum(LifeCycleStage), nullable=False)
    statute = Column(Enum(ImpactStatute), nullable=False)
    extension = Column(Enum(ImpactExtension), nullable=False)
    duration = Column(Enum(ImpactDuration), nullable=False)
    intensity = Column(Enum(ImpactIntensity), nullable=False)
    probability = Column(Enum(ImpactProbability), nullable=False)
    significance = Column(String(100))
    description_of_measures = Column(Text, nullable=False)
    deadline = Column(DateTime, nullable=False)
    responsible = Column(String(200))
    effectiveness_assessment = Column(Text, default="")
    compliance_requirements = Column(Text, default="")
    observations = Column(Text, default="")
    department = relationship('Department', lazy='joined')
    subproject = relationship('Subproject', lazy='joined')
    risks_and_impact = relationship('RiskAndImpact', lazy='joined')
    environmental_factor = relationship('EnvironmentalFactor', lazy='joined')
    legal_requirements = relationship(
        'LegalRequirement', secondary=impact_assessment_legal_requirements,
        lazy='selectin', order_by='LegalRequirement.id'
    )

Index('idx_impact_department_id', ImpactAssessment.department_id)
Index('idx_impact_subproject_id', ImpactAssessment.subproject_id)


# Programs

class StrategicObjective(Base, RecordMixin):
    __tablename__ = 'strategic_objectives'
    description = Column(Text, nullable=False)
    goals = Column(Text, nullable=False)
    strategies_for_achievement = Column(Text, nullable=False)
    specific_objectives = relationship(
        'SpecificObjective', back_populates='strategic_objective',
        lazy='selectin', order_by='SpecificObjective.id'
    )


class SpecificObjective(Base, RecordMixin):
    __tablename__ = 'specific_objectives'
    strategic_objective_id = Column(Integer, ForeignKey('strategic_objectives.id'), nullable=False)
    specific_objective = Column(Text, nullable=False)
    actions_for_achievement = Column(Text, nullable=False)
    responsible_person = Column(String(200), nullable=False)
    necessary_resources = Column(Text, nullable=False)
    indicator = Column(String(300), nullable=False)
    goal = Column(String(300), nullable=False)
    monitoring_frequency = Column(String(100), nullable=False)
    deadline = Column(DateTime, nullable=False)
    observation = Column(Text, default="")
    strategic_objective = relationship('StrategicObjective', back_populates='specific_objectives', lazy='joined')

Index('idx_specific_strategic_objective_id', SpecificObjective.strategic_objective_id)


# Training

class TrainingPlan(Base, RecordMixin):
    __tablename__ = 'training_plans'
    updated_by = Column(String(200), nullable=False)
    date = Column(DateTime, nullable=False)
    year = Column(Integer, nullable=False, index=True)
    training_area = Column(String(200), nullable=False)
    training_title = Column(String(300), nullable=False)
    training_objective = Column(Text, nullable=False)
    training_type = Column(Enum(TrainingType), nullable=False)
    training_entity = Column(String(200), nullable=False)
    duration = Column(String(100), nullable=False)
    number_of_trainees = Column(Integer, nullable=False)
    training_recipients = Column(Text, nullable=False)
    training_month = Column(Enum(TrainingMonth), nullable=False)
    training_status = Column(Enum(TrainingStatus), default=TrainingStatus.PLANNED, nullable=False)
    observations = Column(Text, default="")


# Resource efficiency

class WasteManagement(Base, RecordMixin):
    __tablename__ = 'waste_management'
    waste_route = Column(String(300), nullable=False)
    labelling = Column(String(300), nullable=False)
    storage = Column(String(300), nullable=False)
    transportation_company_method = Column(String(300), nullable=False)
    disposal_company = Column(String(300), nullable=False)
    special_instructions = Column(Text, default="")


# Communications

class WorkerGrievance(Base, RecordMixin):
    __tablename__ = 'worker_grievances'
    name = Column(String(200), nullable=False)
    company = Column(String(200), nullable=False)
    date = Column(DateTime, nullable=False)
    prefered_contact_method = Column(String(100), nullable=False)
    contact = Column(String(200), nullable=False)
    prefered_language = Column(String(100), nullable=False)
    other_language = Column(String(100))
    grievance_details = Column(Text, nullable=False)
    name_of_person_acknowledging_grievance = Column(String(200))
    position_of_person_acknowledging_grievance = Column(String(200))
    date_of_acknowledgement = Column(DateTime)
    follow_up_details = Column(Text)
    closed_out_date = Column(DateTime)


class Complaint(Base, RecordMixin):
    """Complaint or claim received from the community, tracked until close-out."""
    __tablename__ = 'complaints'
    number = Column(String(50), nullable=False, unique=True)
    date_occurred = Column(DateTime, nullable=False)
    local_occurrence = Column(String(300), nullable=False)
    how_occurred = Column(Text, nullable=False)
    who_involved = Column(Text, nullable=False)
    report_and_explanation = Column(Text, nullable=False)
    registered_date = Column(DateTime, default=now, nullable=False)
    claim_local_occurrence = Column(String(300), nullable=False)
    complaintant_gender = Column(String(50), nullable=False)
    complaintant_age = Column(String(50), nullable=False)
    anonymous_complaint = Column(String(50), nullable=False)
    telephone = Column(String(100), nullable=False)
    email = Column(String(200))
    complaintant_address = Column(String(300), nullable=False)
    complaintant_accepted = Column(String(50), nullable=False)
    action_taken = Column(Text, nullable=False)
    complaintant_notified = Column(String(50))
    notification_method = Column(String(100), nullable=False)
    closing_date = Column(DateTime, nullable=False)
    claim_category = Column(String(100), nullable=False)
    other_claim_category = Column(String(200), default="")
    inspection_date = Column(DateTime, nullable=False)
    collected_information = Column(Text, nullable=False)
    resolution_type = Column(String(100), nullable=False)
    resolution_date = Column(DateTime, nullable=False)
    resolution_submitted = Column(String(50), nullable=False)
    corrective_action_taken = Column(Text, nullable=False)
    involved_in_resolution = Column(Text, nullable=False)
    complaintant_satisfaction = Column(String(100), nullable=False)
    resources_spent = Column(Float, default=0, nullable=False)
    number_of_days_since_received_to_closure = Column(Integer, nullable=False)
    monitoring_after_closure = Column(String(100), nullable=False)
    monitoring_method_and_frequency = Column(Text, nullable=False)
    follow_up = Column(Text, nullable=False)
    involved_institutions = Column(Text)
    suggested_preventive_actions = Column(Text, nullable=False)
    # Evidence rows are detached, not deleted, when the complaint goes away
    closure_evidence = relationship(
        'ClosureEvidence', back_populates='complaint', lazy='selectin', order_by='ClosureEvidence.id'
    )


class ClosureEvidence(Base, RecordMixin):
    """Photo and document proving a complaint was closed out."""
    __tablename__ = 'closure_evidence'
    complaint_id = Column(Integer, ForeignKey('complaints.id'))
    photo = Column(String(1000), nullable=False)
    document = Column(String(1000), nullable=False)
    created_by = Column(String(200), nullable=False)
    complaint = relationship('Complaint', back_populates='closure_evidence')

Index('idx_closure_evidence_complaint_id', ClosureEvidence.complaint_id)

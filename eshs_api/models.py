from flask_sqlalchemy import SQLAlchemy
from eshs_shared.models import (
    Base, Department, Position, ToolboxTalk, Incident, DocumentType, Document,
    Subproject, ScreeningForm, LegalRequirement, RiskAndImpact, EnvironmentalFactor, ImpactAssessment,
    StrategicObjective, SpecificObjective, TrainingPlan, WasteManagement, WorkerGrievance,
    Complaint, ClosureEvidence, now
)

db = SQLAlchemy(model_class=Base)

import enum


class LegalRequirementStatus(str, enum.Enum):
    """Lifecycle of a legal requirement tracked in the legal register.

    Stored upper case; the API reports it lower case.
    """
    ACTIVE = "ACTIVE"
    AMENDED = "AMENDED"
    REVOKED = "REVOKED"


class TrainingType(str, enum.Enum):
    """Whether a planned training is delivered in-house or by a third party."""
    EXTERNAL = "External"
    INTERNAL = "Internal"


class TrainingStatus(str, enum.Enum):
    COMPLETED = "Completed"
    PLANNED = "Planned"


class TrainingMonth(str, enum.Enum):
    """Month in which a planned training is scheduled."""
    JANUARY = "January"
    FEBRUARY = "February"
    MARCH = "March"
    APRIL = "April"
    MAY = "May"
    JUNE = "June"
    JULY = "July"
    AUGUST = "August"
    SEPTEMBER = "September"
    OCTOBER = "October"
    NOVEMBER = "November"
    DECEMBER = "December"


# Impact assessment scales. Values are the codes the dashboard sends and reads.

class LifeCycleStage(str, enum.Enum):
    """Project phase in which an environmental or social impact occurs."""
    PRE_CONSTRUCTION = "PRE_CONSTRUCAO"
    CONSTRUCTION = "CONSTRUCAO"
    OPERATION = "OPERACAO"
    DECOMMISSIONING = "DESATIVACAO"
    CLOSURE = "ENCERRAMENTO"
    RESTORATION = "REINTEGRACAO_RESTAURACAO"


class ImpactStatute(str, enum.Enum):
    POSITIVE = "POSITIVO"
    NEGATIVE = "NEGATIVO"


class ImpactExtension(str, enum.Enum):
    LOCAL = "LOCAL"
    REGIONAL = "REGIONAL"
    NATIONAL = "NACIONAL"
    GLOBAL = "GLOBAL"


class ImpactDuration(str, enum.Enum):
    SHORT_TERM = "CURTO_PRAZO"
    MEDIUM_TERM = "MEDIO_PRAZO"
    LONG_TERM = "LONGO_PRAZO"


class ImpactIntensity(str, enum.Enum):
    LOW = "BAIXA"
    MEDIUM = "MEDIA"
    HIGH = "ALTA"


class ImpactProbability(str, enum.Enum):
    UNLIKELY = "IMPROVAVEL"
    LIKELY = "PROVAVEL"
    HIGHLY_LIKELY = "ALTAMENTE_PROVAVEL"
    CERTAIN = "DEFINITIVA"

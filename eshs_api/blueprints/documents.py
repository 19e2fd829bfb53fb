"""Documents blueprint: document types and the controlled document register."""
from flask import Blueprint
from ..models import Document, DocumentType
from ..base.generic_crud import GenericCRUD, register_crud_routes
from ..utils import int_query_arg, reference_guard
from eshs_shared.schemas import (
    DocumentTypeCreate, DocumentTypeUpdate, DocumentTypeRecord,
    DocumentCreate, DocumentUpdate, DocumentRecord,
)


def document_filter(args):
    """``?typeId=<id>`` narrows the register to one document type."""
    type_id = int_query_arg(args, 'typeId')
    if type_id is None:
        return []
    return [Document.document_type_id == type_id]


def create_blueprint(gateway, storage=None):
    bp = Blueprint('documents', __name__, url_prefix='/api')

    document_types = GenericCRUD(
        gateway,
        model=DocumentType,
        create_schema=DocumentTypeCreate,
        update_schema=DocumentTypeUpdate,
        response_schema=DocumentTypeRecord,
        order_by=(DocumentType.created_at.desc(),),
        singular='document type',
        plural='document types',
        delete_guard=reference_guard(
            Document, Document.document_type_id,
            'Cannot delete document type that is in use by documents'
        ),
    )
    register_crud_routes(bp, document_types, 'document-types')

    documents = GenericCRUD(
        gateway,
        model=Document,
        create_schema=DocumentCreate,
        update_schema=DocumentUpdate,
        response_schema=DocumentRecord,
        order_by=(Document.created_at.desc(),),
        singular='document',
        plural='documents',
        references={'document_type': 'document_type_id'},
        list_filter=document_filter,
        storage=storage,
        attachment_fields=('document_path',),
    )
    register_crud_routes(bp, documents, 'documents')

    return bp

"""MongoDB implementation of UserRepository."""

import uuid
from dataclasses import asdict
from datetime import datetime
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateUserError, UserNotFoundError
from domain.model.user import UserRecord

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection. Email uniqueness depends on these."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> UserRecord:
        """Convert MongoDB document to UserRecord."""
        return UserRecord(
            id=doc['_id'],
            first_name=doc.get('first_name', ''),
            last_name=doc.get('last_name', ''),
            email=doc['email'],
            password_hash=doc['password_hash'],
            activated=doc.get('activated', False),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
        )

    def create_user(self, record: UserRecord) -> str:
        """Insert a new user document and return its ID."""
        user_id = uuid.uuid4().hex
        user_doc = asdict(record)
        del user_doc['id']
        user_doc['_id'] = user_id

        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"email": record.email})
            raise DuplicateUserError() from None
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": record.email, "error": str(e)})
            raise

        logger.info("User created", extra={"userId": user_id, "email": record.email})
        return user_id

    def get_user_by_email(self, email: str) -> UserRecord:
        """Find a user by email."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise
        if not doc:
            raise UserNotFoundError("user not found by email")
        return self._to_domain(doc)

    def get_user_by_id(self, user_id: str) -> UserRecord:
        """Find a user by ID."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise
        if not doc:
            raise UserNotFoundError("user not found by id")
        return self._to_domain(doc)

    def update_user_by_id(self, user_id: str, activated: bool, updated_at: datetime) -> None:
        """Set the activation flag and updated_at for a user."""
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'activated': activated, 'updated_at': updated_at}}
            )
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise
        if result.matched_count == 0:
            raise UserNotFoundError("unable to update by id: user not found")
        logger.debug("Updated activation state", extra={"userId": user_id, "activated": activated})

# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Certificate registry operations.

All state changing operations run in one registry wide critical section: a process local lock
plus the row lock on the registry state, both held until the transaction is committed.
A failing precondition rolls the transaction back, so every operation is applied fully or not at all.
Reads do not take the lock.
"""

import time
import logging
import threading
import contextlib
from typing import Generator

import sqlalchemy.orm as sa_orm
import sqlalchemy.exc

from common import parsing

import registry_certificate.db.registry_state as db_state
import registry_certificate.db.issuer as db_issuer
import registry_certificate.db.certificate as db_cert
import registry_certificate.db.event as db_event
from registry_certificate.db.event import EventType
from registry_certificate.exception import registry_errors as err
from registry_certificate.logging import RegistryOperationsLogEntry as LogEntry
from registry_certificate.models import VerificationOutcome

_logger = logging.getLogger(__name__)

_registry_lock = threading.Lock()

_ZERO_HASH = bytes(32)


def _now() -> int:
    """Host clock in seconds since 1.1.1970"""
    return int(time.time())


@contextlib.contextmanager
def _operation_logging(message: str, operation: LogEntry.Operation, step: LogEntry.Step, caller: str | None = None, **fields) -> Generator[None, None, None]:
    """Writes an operations log entry with the outcome of the enclosed operation"""
    try:
        yield
    except err.RegistryError as e:
        _logger.warning(
            LogEntry(
                message=f"{message} failed",
                status=LogEntry.Status.error,
                operation=operation,
                step=step,
                caller=caller,
                error_code=e.error,
                **fields,
            )
        )
        raise
    _logger.info(
        LogEntry(
            message=message,
            status=LogEntry.Status.success,
            operation=operation,
            step=step,
            caller=caller,
            **fields,
        )
    )


@contextlib.contextmanager
def registry_transaction(session: sa_orm.Session) -> Generator[db_state.RegistryState, None, None]:
    """
    Critical section for state changes. Yields the locked registry state.
    Commits when the block completes, rolls back on any exception.
    """
    with _registry_lock:
        try:
            state = db_state.lock_registry_state(session)
            if state is None:
                raise err.RegistryNotInitializedError()
            yield state
            session.commit()
        except Exception:
            session.rollback()
            raise


def _normalize_caller(caller: str) -> str:
    try:
        return parsing.normalize_address(caller)
    except ValueError:
        raise err.AuthorizationError("Caller address is malformed")


def _parse_address(address: str, allow_zero: bool = True) -> str:
    try:
        address = parsing.normalize_address(address)
    except ValueError:
        raise err.InvalidArgumentError("Address must be 0x followed by 40 hex digits")
    if not allow_zero and address == parsing.ZERO_ADDRESS:
        raise err.InvalidArgumentError("Address must not be the zero address")
    return address


def _parse_hash(cert_hash: str) -> bytes:
    try:
        raw_hash = parsing.hash_from_hex(cert_hash)
    except ValueError as e:
        raise err.InvalidArgumentError(f"cert_hash: {e}")
    if raw_hash == _ZERO_HASH:
        raise err.InvalidArgumentError("cert_hash must not be zero")
    return raw_hash


##################
# Initialization #
##################


def initialize_registry(session: sa_orm.Session, owner: str) -> db_state.RegistryState:
    """
    Stores the owner and authorizes it as first issuer.
    Does nothing if the registry already has an owner; the owner can not be changed.
    """
    with _operation_logging("Registry initialization", LogEntry.Operation.initialization, LogEntry.Step.initialization_owner, address=owner):
        owner = _parse_address(owner, allow_zero=False)
        with _registry_lock:
            state = db_state.get_registry_state(session)
            if state is not None:
                if state.owner != owner:
                    _logger.warning(f"Registry already owned by {state.owner}, ignoring configured owner {owner}")
                return state
            now = _now()
            try:
                state = db_state.create_registry_state(session, owner, now)
                db_issuer.set_authorization(session, owner, True)
                db_event.emit(session, EventType.issuer_added, now, address=owner)
                session.commit()
            except sqlalchemy.exc.IntegrityError:
                # Another instance initialized the registry in the meantime
                session.rollback()
                return db_state.get_registry_state(session)
            return state


def get_owner(session: sa_orm.Session) -> str:
    state = db_state.get_registry_state(session)
    if state is None:
        raise err.RegistryNotInitializedError()
    return state.owner


##########
# Issuer #
##########


def add_issuer(session: sa_orm.Session, caller: str, address: str) -> None:
    """Owner only. Authorizes the address; re-adding an issuer succeeds and emits again."""
    with _operation_logging("Issuer added", LogEntry.Operation.issuer_management, LogEntry.Step.issuer_management_add, caller, address=address):
        caller = _normalize_caller(caller)
        with registry_transaction(session) as state:
            if caller != state.owner:
                raise err.AuthorizationError("Only the owner can add issuers")
            address = _parse_address(address, allow_zero=False)
            db_issuer.set_authorization(session, address, True)
            db_event.emit(session, EventType.issuer_added, _now(), address=address)


def remove_issuer(session: sa_orm.Session, caller: str, address: str) -> None:
    """Owner only. Clears the flag, also for addresses which never were issuers."""
    with _operation_logging("Issuer removed", LogEntry.Operation.issuer_management, LogEntry.Step.issuer_management_remove, caller, address=address):
        caller = _normalize_caller(caller)
        with registry_transaction(session) as state:
            if caller != state.owner:
                raise err.AuthorizationError("Only the owner can remove issuers")
            address = _parse_address(address)
            db_issuer.set_authorization(session, address, False)
            db_event.emit(session, EventType.issuer_removed, _now(), address=address)


def is_issuer(session: sa_orm.Session, address: str) -> bool:
    return db_issuer.is_authorized(session, _parse_address(address))


def list_issuers(session: sa_orm.Session) -> list[str]:
    return db_issuer.list_authorized(session)


################
# Certificates #
################


def issue_certificate(session: sa_orm.Session, caller: str, cert_id: str, cert_hash: str, ipfs_cid: str = "") -> db_cert.CertificateRecord:
    """
    Creates an active record issued by the caller at the current time.
    Preconditions are checked in order: caller is an issuer, cert_id not empty, hash not zero, cert_id unused.
    """
    with _operation_logging("Certificate issued", LogEntry.Operation.issuance, LogEntry.Step.issuance_record, caller, cert_id=cert_id):
        caller = _normalize_caller(caller)
        with registry_transaction(session):
            if not db_issuer.is_authorized(session, caller):
                raise err.AuthorizationError("Caller is not an authorized issuer")
            if not cert_id:
                raise err.InvalidArgumentError("cert_id must not be empty")
            raw_hash = _parse_hash(cert_hash)
            if db_cert.get_certificate(session, cert_id) is not None:
                raise err.AlreadyExistsError(f"cert_id {cert_id!r}")
            now = _now()
            record = db_cert.add_certificate(session, cert_id, raw_hash, ipfs_cid or "", caller, now)
            db_event.emit(
                session,
                EventType.certificate_issued,
                now,
                cert_id=cert_id,
                cert_hash=parsing.hash_to_hex(raw_hash),
                ipfs_cid=record.ipfs_cid,
                issuer=caller,
            )
        return record


def revoke_certificate(session: sa_orm.Session, caller: str, cert_id: str) -> None:
    """Irreversibly revokes the record. Only its issuer or the owner may do so."""
    with _operation_logging("Certificate revoked", LogEntry.Operation.revocation, LogEntry.Step.revocation_flag, caller, cert_id=cert_id):
        caller = _normalize_caller(caller)
        with registry_transaction(session) as state:
            record = db_cert.get_certificate(session, cert_id)
            if record is None:
                raise err.NotFoundError(f"cert_id {cert_id!r}")
            if record.revoked:
                raise err.AlreadyRevokedError(f"cert_id {cert_id!r}")
            if caller not in (record.issued_by, state.owner):
                raise err.AuthorizationError("Only the issuer of the certificate or the owner can revoke it")
            db_cert.mark_revoked(session, record)
            db_event.emit(session, EventType.certificate_revoked, _now(), cert_id=cert_id, revoker=caller)


def get_certificate(session: sa_orm.Session, cert_id: str) -> db_cert.CertificateRecord:
    record = db_cert.get_certificate(session, cert_id)
    if record is None:
        raise err.NotFoundError(f"cert_id {cert_id!r}")
    return record


def verify_certificate_diagnostic(session: sa_orm.Session, cert_id: str, cert_hash: str) -> VerificationOutcome:
    """Like `verify_certificate`, but tells apart why a certificate is not valid"""
    record = db_cert.get_certificate(session, cert_id)
    if record is None:
        return VerificationOutcome.not_found
    if record.revoked:
        return VerificationOutcome.revoked
    try:
        raw_hash = parsing.hash_from_hex(cert_hash)
    except ValueError:
        return VerificationOutcome.hash_mismatch
    return VerificationOutcome.valid if raw_hash == record.cert_hash else VerificationOutcome.hash_mismatch


def verify_certificate(session: sa_orm.Session, cert_id: str, cert_hash: str) -> bool:
    """
    True if the certificate exists, is not revoked and has the given hash.
    Does not disclose which of the conditions failed.
    """
    return verify_certificate_diagnostic(session, cert_id, cert_hash) == VerificationOutcome.valid


##########
# Events #
##########


def list_events(session: sa_orm.Session, after: int = 0, limit: int = 100) -> list[db_event.RegistryEvent]:
    return db_event.list_events(session, after, limit)

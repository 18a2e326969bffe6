"""
Module 04 - Mint State Machine

Owns all mutable sale state and exposes the gated operations that change it.

Every operation runs as one transaction under a single re-entrant lock:
all checks pass and the whole delta (counters, funds, flags) commits, or
nothing changes and a typed MintGateException is raised. Administrative
setters take the same lock, so a flag flip lands strictly before or
after any mint's checks.

Check order for the two sale mints (first failure wins):
1. phase flag           -> SaleNotActiveException
2. total supply         -> SupplyExceededException
3. per-wallet quota     -> WalletQuotaExceededException
4. payment              -> InsufficientPaymentException
5. allow-list proof     -> NotWhitelistedException (whitelist mint only)

Payment policy: the full amount sent is retained. Anything above
price x quantity is reported as MintReceipt.excess_payment, never refunded.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Sequence, Union

from core.crypto.hashing import HASH_SIZE, from_hex32, to_hex
from core.merkle.merkle_tree import InclusionProof, verify_inclusion
from core.mint.collaborators import (
    AuthorizationRole,
    InMemoryPaymentChannel,
    InMemoryTokenLedger,
    PaymentChannel,
    SingleOwnerRole,
    TokenLedger,
)
from core.schemas.errors import (
    AlreadyMintedException,
    InsufficientPaymentException,
    InvalidMintRequestException,
    NotWhitelistedException,
    SaleNotActiveException,
    SupplyExceededException,
    TransferFailedException,
    UnauthorizedException,
    UnknownTokenException,
    WalletQuotaExceededException,
)
from core.schemas.identifiers import (
    IdentifierLike,
    display_identifier,
    normalize_identifier,
)
from core.schemas.sale import (
    MintOperation,
    MintReceipt,
    MintStateSnapshot,
    SaleConfiguration,
    WithdrawalReceipt,
)


logger = logging.getLogger(__name__)


ProofLike = Union[InclusionProof, Sequence[bytes]]


@dataclass
class MintState:
    """Mutable sale state. Only MintStateMachine writes to it."""

    total_issued: int = 0
    public_mint_count: dict[bytes, int] = field(default_factory=dict)
    whitelist_mint_count: dict[bytes, int] = field(default_factory=dict)
    public_sale_active: bool = False
    whitelist_sale_active: bool = False
    paused: bool = False
    revealed: bool = False
    team_minted: bool = False
    commitment_root: bytes | None = None
    accumulated_funds: int = 0
    base_uri: str = ""
    placeholder_uri: str = ""


def _coerce_root(root: bytes | str) -> bytes:
    if isinstance(root, str):
        return from_hex32(root)
    if isinstance(root, (bytes, bytearray)) and len(root) == HASH_SIZE:
        return bytes(root)
    raise ValueError(f"Commitment root must be {HASH_SIZE} bytes or a 0x-prefixed hex string")


def _validate_mint_request(quantity: Any, payment: Any) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidMintRequestException(
            f"quantity must be a positive integer, got {quantity!r}",
            details={"quantity": repr(quantity)},
        )
    if isinstance(payment, bool) or not isinstance(payment, int) or payment < 0:
        raise InvalidMintRequestException(
            f"payment must be a non-negative integer (wei), got {payment!r}",
            details={"payment": repr(payment)},
        )


class MintStateMachine:
    """
    Two-phase sale over a fixed-supply token collection.

    Usage:
        machine = MintStateMachine.create(sale, owner=OWNER)
        machine.set_public_sale_active(OWNER, True)
        receipt = machine.public_mint(buyer, 2, 2 * sale.public_price)
    """

    def __init__(
        self,
        sale: SaleConfiguration,
        *,
        ledger: TokenLedger,
        role: AuthorizationRole,
        payments: PaymentChannel,
        commitment_root: bytes | str | None = None,
        base_uri: str = "",
        placeholder_uri: str = "",
        uri_suffix: str = ".json",
    ) -> None:
        self._sale = sale
        self._ledger = ledger
        self._role = role
        self._payments = payments
        self._uri_suffix = uri_suffix
        self._lock = threading.RLock()
        self._state = MintState(
            commitment_root=_coerce_root(commitment_root) if commitment_root is not None else None,
            base_uri=base_uri,
            placeholder_uri=placeholder_uri,
        )

    @classmethod
    def create(
        cls,
        sale: SaleConfiguration,
        owner: IdentifierLike,
        **kwargs: Any,
    ) -> "MintStateMachine":
        """Build a machine wired to the in-memory collaborators."""
        return cls(
            sale,
            ledger=InMemoryTokenLedger(),
            role=SingleOwnerRole(owner),
            payments=InMemoryPaymentChannel(),
            **kwargs,
        )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def sale(self) -> SaleConfiguration:
        return self._sale

    @property
    def ledger(self) -> TokenLedger:
        return self._ledger

    @property
    def role(self) -> AuthorizationRole:
        return self._role

    @property
    def payments(self) -> PaymentChannel:
        return self._payments

    @property
    def total_issued(self) -> int:
        with self._lock:
            return self._state.total_issued

    @property
    def accumulated_funds(self) -> int:
        with self._lock:
            return self._state.accumulated_funds

    @property
    def public_sale_active(self) -> bool:
        with self._lock:
            return self._state.public_sale_active

    @property
    def whitelist_sale_active(self) -> bool:
        with self._lock:
            return self._state.whitelist_sale_active

    @property
    def paused(self) -> bool:
        with self._lock:
            return self._state.paused

    @property
    def revealed(self) -> bool:
        with self._lock:
            return self._state.revealed

    @property
    def team_minted(self) -> bool:
        with self._lock:
            return self._state.team_minted

    @property
    def base_uri(self) -> str:
        with self._lock:
            return self._state.base_uri

    @property
    def placeholder_uri(self) -> str:
        with self._lock:
            return self._state.placeholder_uri

    def get_commitment_root(self) -> bytes | None:
        with self._lock:
            return self._state.commitment_root

    def public_mint_count(self, identifier: IdentifierLike) -> int:
        key = normalize_identifier(identifier)
        with self._lock:
            return self._state.public_mint_count.get(key, 0)

    def whitelist_mint_count(self, identifier: IdentifierLike) -> int:
        key = normalize_identifier(identifier)
        with self._lock:
            return self._state.whitelist_mint_count.get(key, 0)

    def snapshot(self) -> MintStateSnapshot:
        with self._lock:
            st = self._state
            return MintStateSnapshot(
                total_issued=st.total_issued,
                max_supply=self._sale.max_supply,
                public_sale_active=st.public_sale_active,
                whitelist_sale_active=st.whitelist_sale_active,
                paused=st.paused,
                revealed=st.revealed,
                team_minted=st.team_minted,
                commitment_root=to_hex(st.commitment_root) if st.commitment_root else None,
                accumulated_funds=st.accumulated_funds,
                base_uri=st.base_uri,
                placeholder_uri=st.placeholder_uri,
                owner=display_identifier(self._role.holder),
            )

    # -------------------------------------------------------------------------
    # Sale mints
    # -------------------------------------------------------------------------

    def public_mint(self, caller: IdentifierLike, quantity: int, payment: int) -> MintReceipt:
        """
        Mint in the public sale.

        Raises:
            InvalidIdentifierException, InvalidMintRequestException,
            SaleNotActiveException, SupplyExceededException,
            WalletQuotaExceededException, InsufficientPaymentException,
            TransferFailedException
        """
        caller_id = normalize_identifier(caller)
        _validate_mint_request(quantity, payment)

        with self._lock:
            st = self._state
            if not st.public_sale_active:
                raise SaleNotActiveException("public")
            self._check_supply(quantity)
            self._check_quota(
                "public", caller_id, quantity,
                st.public_mint_count, self._sale.max_public_per_wallet,
            )
            required = self._sale.public_price * quantity
            if payment < required:
                raise InsufficientPaymentException(required=required, received=payment)

            return self._commit_sale_mint(
                "public", caller_id, quantity, payment, required, st.public_mint_count,
            )

    def whitelist_mint(
        self,
        caller: IdentifierLike,
        quantity: int,
        payment: int,
        proof: ProofLike,
    ) -> MintReceipt:
        """
        Mint in the allow-list sale.

        The proof is checked against the root installed at the time of the
        call, for the caller's own address.

        Raises:
            Everything public_mint raises, plus NotWhitelistedException
        """
        caller_id = normalize_identifier(caller)
        _validate_mint_request(quantity, payment)

        with self._lock:
            st = self._state
            if not st.whitelist_sale_active:
                raise SaleNotActiveException("whitelist")
            self._check_supply(quantity)
            self._check_quota(
                "whitelist", caller_id, quantity,
                st.whitelist_mint_count, self._sale.max_whitelist_per_wallet,
            )
            required = self._sale.whitelist_price * quantity
            if payment < required:
                raise InsufficientPaymentException(required=required, received=payment)
            if st.commitment_root is None or not verify_inclusion(
                st.commitment_root, caller_id, proof
            ):
                raise NotWhitelistedException(display_identifier(caller_id))

            return self._commit_sale_mint(
                "whitelist", caller_id, quantity, payment, required, st.whitelist_mint_count,
            )

    def _check_supply(self, quantity: int) -> None:
        issued = self._state.total_issued
        if issued + quantity > self._sale.max_supply:
            raise SupplyExceededException(
                requested=quantity,
                total_issued=issued,
                max_supply=self._sale.max_supply,
            )

    @staticmethod
    def _check_quota(
        phase: str,
        caller_id: bytes,
        quantity: int,
        counter: dict[bytes, int],
        quota: int,
    ) -> None:
        minted = counter.get(caller_id, 0)
        if minted + quantity > quota:
            raise WalletQuotaExceededException(
                phase=phase, requested=quantity, minted=minted, quota=quota,
            )

    def _commit_sale_mint(
        self,
        operation: MintOperation,
        caller_id: bytes,
        quantity: int,
        payment: int,
        required: int,
        counter: dict[bytes, int],
    ) -> MintReceipt:
        # Caller holds self._lock.
        if payment > 0:
            try:
                accepted = self._payments.accept(caller_id, payment)
            except Exception as e:
                raise TransferFailedException(
                    f"Payment channel raised: {e}",
                    amount=payment,
                ) from e
            if not accepted:
                raise TransferFailedException(
                    "Payment was rejected by the payment channel",
                    amount=payment,
                )

        try:
            issued = self._ledger.issue(caller_id, quantity)
        except Exception as e:
            if payment > 0 and not self._refund(caller_id, payment):
                # Refund failed; the payment stays on the books.
                self._state.accumulated_funds += payment
                raise TransferFailedException(
                    f"Token issuance failed ({e}) and the refund was rejected; "
                    f"payment retained in accumulated funds",
                    amount=payment,
                    destination=display_identifier(caller_id),
                ) from e
            raise

        st = self._state
        counter[caller_id] = counter.get(caller_id, 0) + quantity
        st.total_issued += quantity
        st.accumulated_funds += payment

        excess = payment - required
        if excess:
            logger.info(
                f"{operation} mint by {display_identifier(caller_id)} overpaid by "
                f"{excess} wei; excess retained"
            )
        logger.info(
            f"{operation} mint: {quantity} token(s) {issued.start}..{issued.stop - 1} "
            f"to {display_identifier(caller_id)} ({st.total_issued}/{self._sale.max_supply})"
        )

        return MintReceipt(
            operation=operation,
            caller=display_identifier(caller_id),
            quantity=quantity,
            first_token_id=issued.start,
            last_token_id=issued.stop - 1,
            amount_paid=payment,
            amount_required=required,
            excess_payment=excess,
            total_issued=st.total_issued,
        )

    def _refund(self, caller_id: bytes, amount: int) -> bool:
        """Return a payment after a failed issuance. False if the rail refused or raised."""
        try:
            ok = self._payments.transfer_out(caller_id, amount)
        except Exception:
            logger.exception(f"Refund of {amount} wei to {display_identifier(caller_id)} raised")
            return False
        if not ok:
            logger.error(
                f"Refund of {amount} wei to {display_identifier(caller_id)} was rejected "
                f"after token issuance failed"
            )
        return ok

    # -------------------------------------------------------------------------
    # Privileged operations
    # -------------------------------------------------------------------------

    def _require_privileged(self, caller: IdentifierLike, operation: str) -> bytes:
        caller_id = normalize_identifier(caller)
        if not self._role.is_privileged(caller_id):
            logger.warning(f"Rejected {operation} from non-owner {display_identifier(caller_id)}")
            raise UnauthorizedException(display_identifier(caller_id), operation)
        return caller_id

    def team_mint(self, caller: IdentifierLike) -> MintReceipt:
        """
        Issue the one-shot team allocation to the owner.

        The allocation is not checked against max_supply unless the sale
        sets enforce_supply_on_team_mint.

        Raises:
            UnauthorizedException, AlreadyMintedException,
            SupplyExceededException (only with enforce_supply_on_team_mint)
        """
        with self._lock:
            caller_id = self._require_privileged(caller, "team mint")
            st = self._state
            if st.team_minted:
                raise AlreadyMintedException()

            quantity = self._sale.team_mint_quantity
            if st.total_issued + quantity > self._sale.max_supply:
                if self._sale.enforce_supply_on_team_mint:
                    self._check_supply(quantity)
                logger.warning(
                    f"Team mint of {quantity} takes total issued to "
                    f"{st.total_issued + quantity}, above max supply {self._sale.max_supply}"
                )

            issued = self._ledger.issue(caller_id, quantity)
            st.team_minted = True
            st.total_issued += quantity

            logger.info(f"team mint: {quantity} token(s) to {display_identifier(caller_id)}")
            return MintReceipt(
                operation="team",
                caller=display_identifier(caller_id),
                quantity=quantity,
                first_token_id=issued.start,
                last_token_id=issued.stop - 1,
                total_issued=st.total_issued,
            )

    def withdraw(self, caller: IdentifierLike) -> WithdrawalReceipt:
        """
        Pay the whole accumulated balance out to the role holder.

        Raises:
            UnauthorizedException
            TransferFailedException: the balance is left untouched
        """
        with self._lock:
            self._require_privileged(caller, "withdraw")
            st = self._state
            amount = st.accumulated_funds
            destination = self._role.holder

            try:
                ok = self._payments.transfer_out(destination, amount)
            except Exception as e:
                raise TransferFailedException(
                    f"Withdrawal transfer raised: {e}",
                    amount=amount,
                    destination=display_identifier(destination),
                ) from e
            if not ok:
                raise TransferFailedException(
                    "Withdrawal transfer was rejected by the payment channel",
                    amount=amount,
                    destination=display_identifier(destination),
                )

            st.accumulated_funds = 0
            logger.info(f"Withdrew {amount} wei to {display_identifier(destination)}")
            return WithdrawalReceipt(
                destination=display_identifier(destination),
                amount=amount,
            )

    def _set(self, caller: IdentifierLike, operation: str, name: str, value: Any) -> None:
        with self._lock:
            self._require_privileged(caller, operation)
            setattr(self._state, name, value)
            logger.info(f"{name} set to {value!r}")

    def _toggle(self, caller: IdentifierLike, operation: str, name: str) -> bool:
        with self._lock:
            self._require_privileged(caller, operation)
            value = not getattr(self._state, name)
            setattr(self._state, name, value)
            logger.info(f"{name} toggled to {value!r}")
            return value

    def set_public_sale_active(self, caller: IdentifierLike, active: bool) -> None:
        self._set(caller, "set public sale", "public_sale_active", bool(active))

    def set_whitelist_sale_active(self, caller: IdentifierLike, active: bool) -> None:
        self._set(caller, "set whitelist sale", "whitelist_sale_active", bool(active))

    def set_paused(self, caller: IdentifierLike, paused: bool) -> None:
        self._set(caller, "set paused", "paused", bool(paused))

    def set_revealed(self, caller: IdentifierLike, revealed: bool) -> None:
        self._set(caller, "set revealed", "revealed", bool(revealed))

    def toggle_public_sale(self, caller: IdentifierLike) -> bool:
        return self._toggle(caller, "toggle public sale", "public_sale_active")

    def toggle_whitelist_sale(self, caller: IdentifierLike) -> bool:
        return self._toggle(caller, "toggle whitelist sale", "whitelist_sale_active")

    def toggle_paused(self, caller: IdentifierLike) -> bool:
        return self._toggle(caller, "toggle paused", "paused")

    def toggle_revealed(self, caller: IdentifierLike) -> bool:
        return self._toggle(caller, "toggle revealed", "revealed")

    def set_commitment_root(self, caller: IdentifierLike, root: bytes | str) -> None:
        """
        Install a new allow-list root.

        Raises:
            UnauthorizedException
            ValueError: If root is not a 32-byte value or 0x hex string
        """
        with self._lock:
            self._require_privileged(caller, "set commitment root")
            self._state.commitment_root = _coerce_root(root)
            logger.info(f"Commitment root set to {to_hex(self._state.commitment_root)}")

    def set_base_uri(self, caller: IdentifierLike, uri: str) -> None:
        self._set(caller, "set base uri", "base_uri", str(uri))

    def set_placeholder_uri(self, caller: IdentifierLike, uri: str) -> None:
        self._set(caller, "set placeholder uri", "placeholder_uri", str(uri))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def resolve_uri(self, token_id: int) -> str:
        """
        Metadata URI for an issued token.

        The placeholder is served until reveal; afterwards the URI is
        base_uri + (token_id + 1) + uri_suffix.

        Raises:
            UnknownTokenException: If token_id was never issued
        """
        with self._lock:
            if isinstance(token_id, bool) or not self._ledger.exists(token_id):
                raise UnknownTokenException(token_id)
            st = self._state
            if not st.revealed:
                return st.placeholder_uri
            return f"{st.base_uri}{token_id + 1}{self._uri_suffix}"


__all__ = [
    "MintState",
    "MintStateMachine",
    "ProofLike",
]

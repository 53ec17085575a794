from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from nirapoth.schemas.debt import DebtPaymentData
from nirapoth.schemas.reward import CreateWithdrawalData, ManualTransactionData, ProcessWithdrawalData
from nirapoth.testing.auth import get_db, require_roles
from nirapoth.testing.db import count_where, envelope, newest_first, paginate, utcnow

router = APIRouter(prefix="/rewards", tags=["rewards"])
admin_router = APIRouter(prefix="/admin/rewards", tags=["rewards"])

citizen_only = require_roles("CITIZEN")
admin_only = require_roles("ADMIN", "SUPER_ADMIN")

CREDIT_TYPES = ("REWARD", "BONUS")
DEBIT_TYPES = ("PENALTY", "DEDUCTION")


def filter_transactions(transactions, type_: Optional[str], source: Optional[str]):
    if type_:
        transactions = [t for t in transactions if t["type"] == type_]
    if source:
        transactions = [t for t in transactions if t["source"] == source]
    return newest_first(transactions)


def month_key(value: str) -> str:
    return value[:7]


def user_stats(db, user_id: str) -> dict:
    transactions = db.transactions_of(user_id)
    reports = [r for r in db.reports.values() if r["citizenId"] == user_id]
    earned = sum(t["amount"] for t in transactions if t["type"] in CREDIT_TYPES)
    penalties = sum(t["amount"] for t in transactions if t["type"] in DEBIT_TYPES)
    rewards = [t["amount"] for t in transactions if t["type"] == "REWARD"]

    this_month = month_key(utcnow())
    last_month = month_key((datetime.now(timezone.utc).replace(day=1) - timedelta(days=1)).isoformat())
    by_month = {}
    for t in transactions:
        point = by_month.setdefault(month_key(t["createdAt"]), {"earnings": 0.0, "penalties": 0.0})
        if t["type"] in CREDIT_TYPES:
            point["earnings"] += t["amount"]
        elif t["type"] in DEBIT_TYPES:
            point["penalties"] += t["amount"]

    by_type = {}
    for t in transactions:
        entry = by_type.setdefault(t["type"], {"type": t["type"], "count": 0, "total": 0.0})
        entry["count"] += 1
        entry["total"] += t["amount"]

    return {
        "totalTransactions": len(transactions),
        "totalEarned": earned,
        "totalPenalties": penalties,
        "netBalance": round(earned - penalties, 2),
        "approvedReports": count_where(reports, status="APPROVED"),
        "rejectedReports": count_where(reports, status="REJECTED"),
        "averageReward": round(sum(rewards) / len(rewards), 2) if rewards else 0,
        "thisMonthEarnings": by_month.get(this_month, {}).get("earnings", 0),
        "lastMonthEarnings": by_month.get(last_month, {}).get("earnings", 0),
        "transactionsByType": list(by_type.values()),
        "earningsTrend": [
            {"month": month, "earnings": p["earnings"], "penalties": p["penalties"],
             "net": round(p["earnings"] - p["penalties"], 2)}
            for month, p in sorted(by_month.items())
        ],
    }


def debt_of(db, debt_id: str, user: dict) -> dict:
    debt = db.debts.get(debt_id)
    if not debt or debt["userId"] != user["id"]:
        raise HTTPException(status_code=404, detail="Debt not found")
    return db.accrue_late_fees(debt)


@router.get("/balance")
async def get_balance(user: dict = Depends(citizen_only), db=Depends(get_db)):
    return envelope(db.balance(user["id"]))


@router.get("/transactions")
async def get_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    type: Optional[str] = Query(None),
    source: Optional[str] = Query(None),
    user: dict = Depends(citizen_only),
    db=Depends(get_db),
):
    transactions = filter_transactions(db.transactions_of(user["id"]), type, source)
    return envelope(paginate(transactions, page, limit, "transactions"))


@router.get("/stats")
async def get_stats(user: dict = Depends(citizen_only), db=Depends(get_db)):
    return envelope(user_stats(db, user["id"]))


@router.post("/withdraw", status_code=201)
async def request_withdrawal(data: CreateWithdrawalData, user: dict = Depends(citizen_only), db=Depends(get_db)):
    balance = db.balance(user["id"])
    if balance["totalOutstandingDebt"] > 0:
        raise HTTPException(status_code=400, detail="Please clear your outstanding debt before withdrawing")
    if data.amount > balance["withdrawableAmount"]:
        raise HTTPException(status_code=400, detail="Insufficient withdrawable balance")
    withdrawal = db.add_withdrawal(user["id"], data.amount, data.method.value,
                                   data.account_details.model_dump(by_alias=True, exclude_none=True))
    return envelope(withdrawal, "Withdrawal request submitted successfully")


@router.get("/withdrawals")
async def get_withdrawals(user: dict = Depends(citizen_only), db=Depends(get_db)):
    return envelope(newest_first(w for w in db.withdrawals.values() if w["userId"] == user["id"]))


@router.delete("/withdrawals/{withdrawal_id}")
async def cancel_withdrawal(withdrawal_id: str, user: dict = Depends(citizen_only), db=Depends(get_db)):
    withdrawal = db.withdrawals.get(withdrawal_id)
    if not withdrawal or withdrawal["userId"] != user["id"]:
        raise HTTPException(status_code=404, detail="Withdrawal not found")
    if withdrawal["status"] != "PENDING":
        raise HTTPException(status_code=400, detail="Only pending withdrawals can be cancelled")
    del db.withdrawals[withdrawal_id]
    return envelope(message="Withdrawal cancelled")


@router.get("/debts")
async def get_debts(user: dict = Depends(citizen_only), db=Depends(get_db)):
    return envelope(db.debt_summary(user["id"]))


@router.get("/debts/total")
async def get_total_debt(user: dict = Depends(citizen_only), db=Depends(get_db)):
    total = db.debt_summary(user["id"])["totalDebt"]
    return envelope({"totalDebt": total, "hasDebt": total > 0})


@router.post("/pay-debt")
async def pay_debt(data: DebtPaymentData, user: dict = Depends(citizen_only), db=Depends(get_db)):
    debt = debt_of(db, data.debt_id, user)
    if debt["status"] != "OUTSTANDING":
        raise HTTPException(status_code=400, detail="Debt is already paid")
    remaining = round(debt["currentAmount"] - debt["paidAmount"], 2)
    if abs(data.amount - remaining) > 0.01:
        raise HTTPException(
            status_code=400,
            detail=f"You must pay the full amount of ৳{remaining:,.2f}. Partial payments are not allowed.",
        )
    return envelope(db.pay_debt(debt, data.amount, data.payment_reference), "Payment Successful!")


@router.get("/debts/{debt_id}")
async def get_debt(debt_id: str, user: dict = Depends(citizen_only), db=Depends(get_db)):
    return envelope(debt_of(db, debt_id, user))


# Admin


@admin_router.get("/transactions")
async def get_all_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    type: Optional[str] = Query(None),
    source: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    user: dict = Depends(admin_only),
    db=Depends(get_db),
):
    transactions = list(db.transactions.values())
    if user_id:
        transactions = [t for t in transactions if t["userId"] == user_id]
    transactions = filter_transactions(transactions, type, source)
    return envelope(paginate(transactions, page, limit, "transactions"))


@admin_router.get("/withdrawals")
async def get_all_withdrawals(
    status: Optional[str] = Query(None),
    user: dict = Depends(admin_only),
    db=Depends(get_db),
):
    withdrawals = list(db.withdrawals.values())
    if status:
        withdrawals = [w for w in withdrawals if w["status"] == status]
    return envelope(newest_first(withdrawals))


@admin_router.put("/withdrawals/{withdrawal_id}")
async def process_withdrawal(
    withdrawal_id: str,
    data: ProcessWithdrawalData,
    user: dict = Depends(admin_only),
    db=Depends(get_db),
):
    withdrawal = db.withdrawals.get(withdrawal_id)
    if not withdrawal:
        raise HTTPException(status_code=404, detail="Withdrawal not found")
    if withdrawal["status"] != "PENDING":
        raise HTTPException(status_code=400, detail="Withdrawal has already been processed")
    withdrawal.update({
        "status": data.status.value,
        "notes": data.notes,
        "processedBy": user["id"],
        "processedAt": utcnow(),
    })
    return envelope(withdrawal)


@admin_router.get("/stats")
async def get_admin_stats(user: dict = Depends(admin_only), db=Depends(get_db)):
    transactions = list(db.transactions.values())
    pending = [w for w in db.withdrawals.values() if w["status"] == "PENDING"]
    rewards = [t["amount"] for t in transactions if t["type"] == "REWARD"]
    return envelope({
        "totalRewardsDistributed": sum(t["amount"] for t in transactions if t["type"] in CREDIT_TYPES),
        "totalPenaltiesCollected": sum(t["deductedAmount"] for t in transactions if t["type"] in DEBIT_TYPES),
        "pendingWithdrawals": len(pending),
        "pendingWithdrawalAmount": sum(w["amount"] for w in pending),
        "totalUsers": count_where(db.users.values(), role="CITIZEN"),
        "activeUsers": len({t["userId"] for t in transactions}),
        "avgRewardPerReport": round(sum(rewards) / len(rewards), 2) if rewards else 0,
    })


@admin_router.post("/manual", status_code=201)
async def create_manual_transaction(data: ManualTransactionData, user: dict = Depends(admin_only),
                                    db=Depends(get_db)):
    if data.user_id not in db.users:
        raise HTTPException(status_code=404, detail="User not found")
    if data.type.value in DEBIT_TYPES:
        transaction = db.charge_penalty(data.user_id, data.amount, data.description)
        transaction.update({"type": data.type.value, "source": "SYSTEM"})
    else:
        transaction = db.credit(data.user_id, data.amount, data.type.value, data.description, source="SYSTEM")
    return envelope(transaction)

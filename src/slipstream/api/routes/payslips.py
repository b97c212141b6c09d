"""Payslip generation and email endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from slipstream.api.deps import get_payslip_service
from slipstream.api.schemas import EmployeeMonthRequest, MonthRequest
from slipstream.services.payslip_service import PayslipService

router = APIRouter(tags=["payslips"])


@router.post("/generate")
async def generate_all(body: MonthRequest,
                       service: PayslipService = Depends(get_payslip_service)) -> dict:
    """Generate, upload and email payslips for every employee in the month."""
    result = await service.generate_all(body.month, body.concurrency_limit)
    return {"success": True, "summary": result.to_summary()}


@router.post("/generate-one")
async def generate_one(body: EmployeeMonthRequest,
                       service: PayslipService = Depends(get_payslip_service)):
    outcome = await service.generate_for_employee(body.emp_id, body.month)
    if not outcome.success:
        return JSONResponse(status_code=502, content={
            "success": False, "message": outcome.error, "result": outcome.to_summary(),
        })
    return {
        "success": True,
        "message": f"Payslip generated for {outcome.employee_code} ({body.month})",
        "url": outcome.url,
    }


@router.post("/resend")
async def resend(body: EmployeeMonthRequest,
                 service: PayslipService = Depends(get_payslip_service)):
    outcome = await service.resend_email(body.emp_id, body.month)
    if not outcome.success:
        return JSONResponse(status_code=502, content={
            "success": False, "message": outcome.error, "result": outcome.to_summary(),
        })
    return {"success": True, "message": "Payslip email sent successfully"}


@router.post("/send-all")
async def send_all(body: MonthRequest,
                   service: PayslipService = Depends(get_payslip_service)) -> dict:
    result = await service.send_all_emails(body.month, body.concurrency_limit)
    return {"success": True, "summary": result.to_summary()}


@router.post("/links")
async def links(body: MonthRequest,
                service: PayslipService = Depends(get_payslip_service)) -> dict:
    return {"success": True, "files": await service.payslip_links(body.month)}

"""Employee listing, detail and monthly statistics endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from slipstream.api.deps import get_directory
from slipstream.services.directory import ALL, EmployeeDirectory

router = APIRouter(tags=["employees"])


@router.get("/employees")
def list_employees(page: int = 1, limit: int = 10, search: str = "",
                   department: str = ALL, status: str = ALL,
                   directory: EmployeeDirectory = Depends(get_directory)) -> dict:
    return {"success": True, **directory.list_employees(page, limit, search, department, status)}


@router.get("/employees/status")
def monthly_status(month: str = "", page: int = 1, limit: int = 10, search: str = "",
                   department: str = ALL,
                   directory: EmployeeDirectory = Depends(get_directory)) -> dict:
    return {"success": True, **directory.monthly_status(month, page, limit, search, department)}


@router.get("/employees/{emp_id}")
def employee_detail(emp_id: str, directory: EmployeeDirectory = Depends(get_directory)) -> dict:
    return {"success": True, "employee": directory.employee_detail(emp_id)}


@router.get("/departments")
def departments(directory: EmployeeDirectory = Depends(get_directory)) -> dict:
    return {"success": True, "departments": directory.departments()}


@router.get("/stats/monthly")
def monthly_stats(month: str = "", directory: EmployeeDirectory = Depends(get_directory)) -> dict:
    return {"success": True, **directory.monthly_stats(month)}


@router.get("/report")
def report(month: str = "", department: str = ALL,
           directory: EmployeeDirectory = Depends(get_directory)) -> dict:
    return {"success": True, **directory.report(month, department)}

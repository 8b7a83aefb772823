"""
Compliance Agent - Hours of Service monitoring.

This agent:
- Checks a driver's hours against the daily HOS limits
- Reads a driver's remaining hours from their latest ELD/HOS log
- Summarizes HOS compliance across the active fleet
- Alerts on violations and drivers running low on hours
"""

from datetime import datetime, timedelta
from time import time
from typing import Any, Optional

from pydantic import BaseModel

from fleetops.agents.base import AgentDecision, BaseAgent
from fleetops.agents.recommendation import DriverHours
from fleetops.data.models import Driver, DutyStatus, HosLog


class HOSStatus(BaseModel):
    """Hours of Service status."""

    driver_id: str
    current_status: DutyStatus
    hours_driven_today: float
    hours_on_duty_today: float
    hours_available_to_drive: float
    hours_available_on_duty: float
    hours_until_required_break: float
    violations: list[str]
    warnings: list[str]

    def to_driver_hours(self) -> DriverHours:
        """Remaining hours in the shape the recommendation agent expects."""
        return DriverHours(
            drive_time_remaining=min(14.0, self.hours_available_to_drive),
            on_duty_remaining=min(14.0, self.hours_available_on_duty),
        )


class DriverHoursStatus(BaseModel):
    """A driver's remaining hours as of their latest log."""

    driver_id: str
    driver_name: str
    truck_id: Optional[str] = None
    duty_status: DutyStatus
    drive_time_remaining: float
    on_duty_remaining: float
    cycle_hours_remaining: float
    violations: list[str]
    last_update: datetime

    def to_driver_hours(self) -> DriverHours:
        return DriverHours(
            drive_time_remaining=min(14.0, self.drive_time_remaining),
            on_duty_remaining=min(14.0, self.on_duty_remaining),
        )


class ComplianceOverview(BaseModel):
    """HOS compliance across active drivers."""

    total_active_drivers: int
    drivers_in_violation: int
    drivers_with_low_hours: int
    compliance_rate: float
    driver_details: list[DriverHoursStatus]


class ComplianceResult(BaseModel):
    """Result of compliance check."""

    timestamp: datetime
    compliance_type: str  # "hos", "fleet"
    status: str  # "compliant", "warning", "violation"
    findings: list[str]
    recommendations: list[str]
    execution_time_seconds: float


class ComplianceAgent(BaseAgent):
    """
    Compliance Agent for Hours of Service.

    Limits (drive, on-duty, cycle and break window) come from the hos
    section of config.yaml.
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize the compliance agent."""
        super().__init__(agent_name="compliance", **kwargs)
        self.hos_limits = self.config_manager.get_hos_limits()

    @property
    def max_drive_hours(self) -> float:
        return float(self.hos_limits.get("max_drive_hours", 11))

    @property
    def max_on_duty_hours(self) -> float:
        return float(self.hos_limits.get("max_on_duty_hours", 14))

    @property
    def max_cycle_hours(self) -> float:
        return float(self.hos_limits.get("max_cycle_hours", 70))

    def check_hos_compliance(
        self,
        driver_id: str,
        current_status: DutyStatus,
        drive_hours_today: float,
        on_duty_hours_today: float,
        last_break_time: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> HOSStatus:
        """
        Check Hours of Service compliance.

        Args:
            driver_id: Driver identifier
            current_status: Current duty status
            drive_hours_today: Hours driven today
            on_duty_hours_today: Hours on duty today
            last_break_time: Time of last break
            now: Reference time for the break window (defaults to now)

        Returns:
            HOSStatus with compliance information
        """
        violations = []
        warnings = []

        max_drive = self.max_drive_hours
        max_on_duty = self.max_on_duty_hours
        break_after = float(self.hos_limits.get("required_break_after_hours", 8))

        # Check driving hours
        hours_available_to_drive = max_drive - drive_hours_today
        if drive_hours_today >= max_drive:
            violations.append(f"Maximum driving hours ({max_drive:g}h) exceeded")
        elif drive_hours_today >= max_drive * 0.9:
            warnings.append(f"Approaching maximum driving hours ({hours_available_to_drive:.1f}h remaining)")

        # Check on-duty hours
        hours_available_on_duty = max_on_duty - on_duty_hours_today
        if on_duty_hours_today >= max_on_duty:
            violations.append(f"Maximum on-duty hours ({max_on_duty:g}h) exceeded")
        elif on_duty_hours_today >= max_on_duty * 0.9:
            warnings.append(f"Approaching maximum on-duty hours ({hours_available_on_duty:.1f}h remaining)")

        # Check required breaks
        hours_until_break = break_after
        if last_break_time:
            hours_since_break = ((now or datetime.now()) - last_break_time).total_seconds() / 3600
            hours_until_break = break_after - hours_since_break

            if hours_since_break >= break_after:
                violations.append(f"Required 30-minute break after {break_after:g}h not taken")
            elif hours_since_break >= break_after * 0.8:
                warnings.append(f"Break required soon ({hours_until_break:.1f}h)")

        status = HOSStatus(
            driver_id=driver_id,
            current_status=DutyStatus(current_status),
            hours_driven_today=drive_hours_today,
            hours_on_duty_today=on_duty_hours_today,
            hours_available_to_drive=max(0.0, hours_available_to_drive),
            hours_available_on_duty=max(0.0, hours_available_on_duty),
            hours_until_required_break=max(0.0, hours_until_break),
            violations=violations,
            warnings=warnings,
        )

        self.logger.info(
            "hos_compliance_check",
            driver_id=driver_id,
            violations=len(violations),
            warnings=len(warnings),
        )

        return status

    def driver_hours_from_logs(self, driver: Driver, logs: list[HosLog]) -> DriverHoursStatus:
        """
        Current hours for a driver from their most recent log.

        A driver with no logs is treated as fresh: full drive, on-duty and
        cycle hours, off duty.
        """
        driver_logs = [log for log in logs if log.driver_id == driver.id]
        latest = max(driver_logs, key=lambda log: log.timestamp) if driver_logs else None

        if latest is None:
            return DriverHoursStatus(
                driver_id=driver.id,
                driver_name=driver.name,
                duty_status=DutyStatus.OFF_DUTY,
                drive_time_remaining=self.max_drive_hours,
                on_duty_remaining=self.max_on_duty_hours,
                cycle_hours_remaining=self.max_cycle_hours,
                violations=[],
                last_update=datetime.now(),
            )

        return DriverHoursStatus(
            driver_id=driver.id,
            driver_name=driver.name,
            truck_id=latest.truck_id,
            duty_status=latest.duty_status,
            drive_time_remaining=(
                latest.drive_time_remaining
                if latest.drive_time_remaining is not None
                else self.max_drive_hours
            ),
            on_duty_remaining=(
                latest.on_duty_remaining
                if latest.on_duty_remaining is not None
                else self.max_on_duty_hours
            ),
            cycle_hours_remaining=(
                latest.cycle_hours_remaining
                if latest.cycle_hours_remaining is not None
                else self.max_cycle_hours
            ),
            violations=list(latest.violations),
            last_update=latest.timestamp,
        )

    def compliance_overview(self, drivers: list[Driver], logs: list[HosLog]) -> ComplianceOverview:
        """
        Summarize HOS compliance over active drivers.

        Args:
            drivers: All drivers (inactive ones are skipped)
            logs: HOS logs for any drivers

        Returns:
            ComplianceOverview; the rate is 100 when there are no active drivers
        """
        start_time = time()
        low_hours = float(self.hos_limits.get("low_hours_threshold", 2))

        details = [self.driver_hours_from_logs(d, logs) for d in drivers if d.is_active]

        violation_count = sum(len(d.violations) for d in details)
        drivers_with_low_hours = sum(
            1 for d in details if d.drive_time_remaining < low_hours or d.on_duty_remaining < low_hours
        )

        if details:
            compliance_rate = round(max(0.0, (len(details) - violation_count) / len(details) * 100), 1)
        else:
            compliance_rate = 100.0

        overview = ComplianceOverview(
            total_active_drivers=len(details),
            drivers_in_violation=violation_count,
            drivers_with_low_hours=drivers_with_low_hours,
            compliance_rate=compliance_rate,
            driver_details=details,
        )

        self.log_decision(
            AgentDecision(
                timestamp=datetime.now(),
                agent_name=self.agent_name,
                decision_type="compliance_overview",
                input_data={"drivers": len(drivers), "logs": len(logs)},
                reasoning=f"{violation_count} violations across {len(details)} active drivers",
                confidence=1.0,
                output_data={
                    "compliance_rate": compliance_rate,
                    "drivers_with_low_hours": drivers_with_low_hours,
                },
                tools_used=["hos_log_reader"],
                execution_time_seconds=time() - start_time,
            )
        )

        return overview

    def execute(self, compliance_type: str, **kwargs: Any) -> ComplianceResult:
        """
        Execute compliance check.

        Args:
            compliance_type: Type of compliance check ("hos" or "fleet")
            **kwargs: Arguments for check_hos_compliance or compliance_overview

        Returns:
            ComplianceResult with findings and recommendations

        Raises:
            ValueError: If the compliance type is unknown
        """
        start_time = time()

        findings = []
        recommendations = []
        status = "compliant"

        if compliance_type == "hos":
            hos_status = self.check_hos_compliance(**kwargs)
            if hos_status.violations:
                status = "violation"
                findings.extend(hos_status.violations)
            elif hos_status.warnings:
                status = "warning"
                findings.extend(hos_status.warnings)
            else:
                findings.append("All HOS requirements met")

        elif compliance_type == "fleet":
            overview = self.compliance_overview(**kwargs)
            if overview.drivers_in_violation:
                status = "violation"
                findings.append(f"{overview.drivers_in_violation} HOS violations recorded")
            if overview.drivers_with_low_hours:
                if status == "compliant":
                    status = "warning"
                findings.append(f"{overview.drivers_with_low_hours} drivers with low hours remaining")
            if status == "compliant":
                findings.append(f"All {overview.total_active_drivers} active drivers compliant")

        else:
            raise ValueError(f"Unknown compliance type: {compliance_type}")

        if status != "compliant":
            recommendations.append("Review driver schedules to ensure compliance")
            recommendations.append("Confirm ELD logs are syncing for every active driver")

        return ComplianceResult(
            timestamp=datetime.now(),
            compliance_type=compliance_type,
            status=status,
            findings=findings,
            recommendations=recommendations,
            execution_time_seconds=time() - start_time,
        )


def main() -> None:
    """Example usage of the compliance agent."""
    from fleetops.core.logging import configure_logging

    configure_logging(json_output=False)

    agent = ComplianceAgent()

    print("\n" + "=" * 80)
    print("HOS COMPLIANCE CHECK")
    print("=" * 80)

    hos_status = agent.check_hos_compliance(
        driver_id="DRV-001",
        current_status=DutyStatus.DRIVING,
        drive_hours_today=9.5,
        on_duty_hours_today=11.0,
        last_break_time=datetime.now() - timedelta(hours=7),
    )

    print(f"Driver: {hos_status.driver_id}")
    print(f"Status: {hos_status.current_status.value}")
    print(f"Hours Driven: {hos_status.hours_driven_today:.1f}h")
    print(f"Hours Available: {hos_status.hours_available_to_drive:.1f}h")
    print()

    if hos_status.violations:
        print("VIOLATIONS:")
        for v in hos_status.violations:
            print(f"  ⚠️  {v}")
        print()

    if hos_status.warnings:
        print("WARNINGS:")
        for w in hos_status.warnings:
            print(f"  ⚡ {w}")
        print()


if __name__ == "__main__":
    main()

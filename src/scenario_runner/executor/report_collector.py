import json
from pathlib import Path
from datetime import datetime
from itertools import groupby
from typing import Dict, List, Any
import logging
from jinja2 import Template

logger = logging.getLogger(__name__)

HTML_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Scenario Report - {{ run.scenario|e }} - {{ timestamp }}</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; background-color: #f5f5f5; }
        .header { background-color: #333; color: white; padding: 20px; border-radius: 5px; margin-bottom: 20px; }
        .summary { display: flex; gap: 20px; margin-bottom: 30px; }
        .summary-card { background: white; padding: 20px; border-radius: 5px; flex: 1; text-align: center;
                        box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .summary-card h3 { margin: 0 0 10px 0; color: #666; }
        .summary-card .number { font-size: 36px; font-weight: bold; }
        .passed { color: #28a745; }
        .failed, .errored { color: #dc3545; }
        .skipped { color: #ffc107; }
        .scenario { background: white; margin-bottom: 20px; border-radius: 5px; overflow: hidden;
                    box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .scenario-header { background: #f8f9fa; padding: 15px 20px; border-bottom: 1px solid #dee2e6; }
        .step { margin-left: 20px; padding: 5px 0; font-family: monospace; font-size: 14px; }
        .phase { color: #6c757d; font-size: 12px; }
        .error { background-color: #f8d7da; color: #721c24; padding: 10px; margin: 10px 0 10px 20px;
                 border-radius: 3px; font-size: 12px; white-space: pre-wrap; }
        .trace { font-family: monospace; font-size: 12px; color: #495057; }
    </style>
</head>
<body>
    <div class="header">
        <h1>{{ run.scenario|e }}</h1>
        <p>Run: {{ run.run_id }} &middot; Context: {{ run.base_context|e }}</p>
        <p>Status: <strong class="{{ run.status }}">{{ run.status|upper }}</strong> &middot; Duration: {{ duration }}</p>
        {% if run.error %}<p>{{ run.error|e }}</p>{% endif %}
    </div>

    <div class="summary">
        <div class="summary-card"><h3>Steps</h3><div class="number">{{ run.summary.total }}</div></div>
        <div class="summary-card"><h3>Passed</h3><div class="number passed">{{ run.summary.passed }}</div></div>
        <div class="summary-card"><h3>Failed</h3><div class="number failed">{{ run.summary.failed + run.summary.errored }}</div></div>
        <div class="summary-card"><h3>Skipped</h3><div class="number skipped">{{ run.summary.skipped }}</div></div>
    </div>

    {% for group in groups %}
    <div class="scenario">
        <div class="scenario-header"><h2>{{ group.name|e }}</h2></div>
        {% for step in group.steps %}
        <div class="step {{ step.status }}">
            {{ step.status|upper }} {{ step.title|e }} <span class="phase">{{ step.phase }} &middot; {{ step.identifier }} &middot; {{ '%.2f'|format(step.duration) }}s</span>
        </div>
        {% if step.error %}
        <div class="error">{{ step.error|e }}{% if step.expected is not none %}
expected: {{ step.expected|e }}
actual:   {{ step.actual|e }}{% endif %}{% if step.screenshot %}
screenshot: {{ step.screenshot|e }}{% endif %}</div>
        {% endif %}
        {% endfor %}
    </div>
    {% endfor %}

    <div class="scenario">
        <div class="scenario-header"><h2>Execution trace</h2></div>
        {% for entry in run.trace %}<div class="trace">{{ entry|e }}</div>{% endfor %}
    </div>
</body>
</html>
"""

JUNIT_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<testsuites name="{{ run.scenario|e }}" time="{{ duration }}" tests="{{ run.summary.total }}" failures="{{ run.summary.failed }}" errors="{{ run.summary.errored }}" skipped="{{ run.summary.skipped }}">
    {% for group in groups %}
    <testsuite name="{{ group.name|e }}" tests="{{ group.steps|length }}" failures="{{ group.failures }}" time="{{ group.duration }}">
        {% for step in group.steps %}
        <testcase classname="{{ run.base_context|e }}" name="{{ step.identifier|e }}: {{ step.title|e }}" time="{{ step.duration }}">
            {% if step.status == 'failed' %}
            <failure message="{{ step.error|default('Step failed', true)|e }}">expected: {{ step.expected|e }}
actual: {{ step.actual|e }}</failure>
            {% elif step.status == 'errored' %}
            <error message="{{ step.error|default('Step errored', true)|e }}"/>
            {% elif step.status == 'skipped' %}
            <skipped/>
            {% endif %}
        </testcase>
        {% endfor %}
    </testsuite>
    {% endfor %}
</testsuites>
"""


class ReportCollector:
    """Writes run reports from ``RunResult.to_dict()`` data"""

    FORMATS = ("html", "json", "junit")

    def __init__(self, output_dir: str = "test-results"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def generate_report(self, results: Dict[str, Any], format: str = "html") -> str:
        """
        Generate run report in specified format

        Args:
            results: Run result dictionary
            format: Report format (html, json, junit)

        Returns:
            Path to generated report
        """
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')

        if format == "html":
            return self._generate_html_report(results, timestamp)
        elif format == "json":
            return self._generate_json_report(results, timestamp)
        elif format == "junit":
            return self._generate_junit_report(results, timestamp)
        else:
            raise ValueError(f"Unsupported report format: {format}")

    def _report_path(self, results: Dict[str, Any], timestamp: str, suffix: str) -> Path:
        run_id = results.get('run_id', 'run')
        return self.output_dir / f"report_{run_id}_{timestamp}.{suffix}"

    def _generate_html_report(self, results: Dict[str, Any], timestamp: str) -> str:
        """Generate HTML report"""
        template = Template(HTML_TEMPLATE)
        html_content = template.render(
            run=results,
            timestamp=timestamp,
            duration=str(_duration(results)),
            groups=_group_steps(results),
        )

        report_path = self._report_path(results, timestamp, "html")
        with open(report_path, 'w', encoding='utf-8') as f:
            f.write(html_content)

        logger.info(f"HTML report generated: {report_path}")
        return str(report_path)

    def _generate_json_report(self, results: Dict[str, Any], timestamp: str) -> str:
        """Generate JSON report"""
        report_path = self._report_path(results, timestamp, "json")

        with open(report_path, 'w', encoding='utf-8') as f:
            json.dump(results, f, indent=2, default=str)

        logger.info(f"JSON report generated: {report_path}")
        return str(report_path)

    def _generate_junit_report(self, results: Dict[str, Any], timestamp: str) -> str:
        """Generate JUnit XML report"""
        template = Template(JUNIT_TEMPLATE)
        junit_content = template.render(
            run=results,
            duration=_duration(results).total_seconds(),
            groups=_group_steps(results),
        )

        report_path = self._report_path(results, timestamp, "xml")
        with open(report_path, 'w', encoding='utf-8') as f:
            f.write(junit_content)

        logger.info(f"JUnit report generated: {report_path}")
        return str(report_path)


def _duration(results: Dict[str, Any]):
    start = datetime.fromisoformat(results.get('start_time', datetime.now().isoformat()))
    end = datetime.fromisoformat(results.get('end_time', datetime.now().isoformat()))
    return end - start


def _group_steps(results: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Group consecutive steps by their scenario path"""
    groups = []
    for name, steps in groupby(results.get('steps', []), key=lambda s: s.get('scenario') or results.get('scenario')):
        steps = list(steps)
        groups.append({
            'name': name,
            'steps': steps,
            'failures': sum(1 for s in steps if s.get('status') == 'failed'),
            'duration': sum(s.get('duration', 0) for s in steps),
        })
    return groups

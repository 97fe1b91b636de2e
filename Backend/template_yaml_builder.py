# template_yaml_builder.py
import ast
from pathlib import Path

# SAM code root: the directory holding the water_server package and requirements.txt
BACKEND_DIR = Path(__file__).resolve().parent
DEFAULT_OUT_PATH = BACKEND_DIR / "template.yaml"
DISPATCHER_PATH = BACKEND_DIR / "water_server" / "dispatcher.py"

def extract_functions_from_dispatcher(path: str):
    """Return sorted list of string keys from the FUNCTIONS dict in dispatcher.py."""
    src = Path(path).read_text(encoding="utf-8")
    tree = ast.parse(src, filename=path)

    functions = []
    for node in ast.walk(tree):
        # Look for: FUNCTIONS = { "key": something, ... }
        if isinstance(node, ast.Assign):
            targets = node.targets
            if len(targets) != 1:
                continue
            target = targets[0]
            if isinstance(target, ast.Name) and target.id == "FUNCTIONS":
                if isinstance(node.value, ast.Dict):
                    for key_node in node.value.keys:
                        if isinstance(key_node, ast.Constant) and isinstance(key_node.value, str):
                            functions.append(key_node.value)
    return sorted(set(functions))

def render_template(functions):
    listed = "".join(f"      - {name}\n" for name in functions)
    return f"""AWSTemplateFormatVersion: '2010-09-09'
Transform: AWS::Serverless-2016-10-31
Description: Water Wars API (auto-generated)

Metadata:
  Note:
    FunctionCount: {len(functions)}
    Functions:
{listed}
Parameters:
  DatabaseUrl:
    Type: String
    NoEcho: true
  JwtSecret:
    Type: String
    NoEcho: true
  AdminServiceToken:
    Type: String
    NoEcho: true
  Timezone:
    Type: String
    Default: UTC

Resources:
  WaterWarsFunction:
    Type: AWS::Serverless::Function
    Properties:
      FunctionName: WaterWarsFunction
      Runtime: python3.11
      Handler: water_server.aws_handler.lambda_handler
      CodeUri: ./
      Timeout: 30
      MemorySize: 256
      Environment:
        Variables:
          DATABASE_URL: !Ref DatabaseUrl
          JWT_SECRET: !Ref JwtSecret
          ADMIN_SERVICE_TOKEN: !Ref AdminServiceToken
          WATER_WARS_TZ: !Ref Timezone
      Events:
        Api:
          Type: Api
          Properties:
            Path: /{{proxy+}}
            Method: ANY
        MidnightWinner:
          Type: ScheduleV2
          Properties:
            ScheduleExpression: cron(5 0 * * ? *)
            ScheduleExpressionTimezone: !Ref Timezone
            Input: !Sub '{{"headers": {{"authorization": "Bearer ${{AdminServiceToken}}"}}, "body": "{{\\"func\\": \\"calculateWinner\\", \\"args\\": {{\\"days_ago\\": 1}}}}"}}'
"""

def generate_template(functions, out_path=DEFAULT_OUT_PATH):
    Path(out_path).write_text(render_template(functions), encoding="utf-8")
    print(f"Wrote {out_path} with {len(functions)} functions.")

if __name__ == "__main__":
    funcs = extract_functions_from_dispatcher(str(DISPATCHER_PATH))
    generate_template(funcs)
